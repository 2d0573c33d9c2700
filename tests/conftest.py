import pytest

from lottieframe.model.composition import Composition


def _shape_layer(shapes, ind=1, name="Shape Layer", **extra):
    layer = {"ty": 4, "ind": ind, "nm": name, "ip": 0, "op": 60, "st": 0, "sr": 1, "shapes": shapes}
    layer.update(extra)
    return layer


def _document(layers=(), assets=(), **extra):
    document = {
        "v": "5.5.2",
        "nm": "test",
        "w": 200,
        "h": 100,
        "ip": 0,
        "op": 60,
        "fr": 30,
        "assets": list(assets),
        "layers": list(layers),
    }
    document.update(extra)
    return document


@pytest.fixture
def composition():
    """Bare, unsealed two second composition at 30fps."""
    return Composition(None, 0, 60, 30)


@pytest.fixture
def shape_layer():
    return _shape_layer


@pytest.fixture
def make_document():
    return _document


@pytest.fixture
def rect():
    def make(position=(0, 0), size=(100, 50), radius=0, name="Rectangle"):
        return {
            "ty": "rc", "nm": name, "d": 1,
            "p": {"a": 0, "k": list(position)},
            "s": {"a": 0, "k": list(size)},
            "r": {"a": 0, "k": radius},
        }
    return make


@pytest.fixture
def fill():
    return {"ty": "fl", "nm": "Fill", "c": {"a": 0, "k": [1, 0, 0, 1]}, "o": {"a": 0, "k": 100}, "r": 1}


@pytest.fixture
def stroke():
    return {
        "ty": "st", "nm": "Stroke",
        "c": {"a": 0, "k": [0, 0, 1, 1]},
        "o": {"a": 0, "k": 100},
        "w": {"a": 0, "k": 2},
        "lc": 2, "lj": 1, "ml": 4,
    }
