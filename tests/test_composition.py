import pytest

from lottieframe.core.builder import CompositionBuilder
from lottieframe.core.loader import composition_from_json
from lottieframe.errors import CompositionParseError, ErrorKind
from lottieframe.model.layer import LayerType
from lottieframe.model.shapes import ShapeGroup


def _image_asset(i):
    return {"id": "image_%s" % i, "w": 10, "h": 10, "u": "images/", "p": "img_%s.png" % i, "e": 0}


def _image_layer(i):
    return {"ty": 2, "ind": i + 1, "nm": "Image %s" % i, "refId": "image_%s" % i, "ip": 0, "op": 60}


def test_duration_from_header(make_document):
    composition = composition_from_json(make_document())
    assert composition.duration == 2000
    assert composition.duration_frames == pytest.approx(60)
    assert composition.duration * composition.frame_rate / 1000 == pytest.approx(
        composition.end_frame - composition.start_frame
    )


def test_duration_with_fractional_frame_rate(make_document):
    composition = composition_from_json(make_document(ip=10, op=100, fr=29.97))
    assert composition.duration == pytest.approx(90 / 29.97 * 1000)
    assert composition.duration_frames == pytest.approx(90)


def test_missing_header_fields_default_to_zero():
    composition = composition_from_json({})
    assert composition.bounds is None
    assert composition.start_frame == 0
    assert composition.end_frame == 0
    assert composition.frame_rate == 0
    assert composition.duration == 0
    assert composition.layers == ()


def test_bounds_use_resolution_scale(make_document):
    composition = composition_from_json(make_document(), scale=2)
    assert composition.bounds.width == 400
    assert composition.bounds.height == 200
    assert composition.scale == 2


def test_assets_split_into_images_and_precomps(make_document, shape_layer, rect, fill):
    assets = [
        _image_asset(0),
        {"id": "comp_0", "layers": [shape_layer([rect(), fill])]},
    ]
    composition = composition_from_json(make_document(assets=assets))
    assert composition.has_images()
    assert list(composition.images) == ["image_0"]
    assert composition.images["image_0"].file_name == "img_0.png"
    assert not composition.images["image_0"].is_embedded
    assert len(composition.precomp_layers("comp_0")) == 1
    assert composition.precomp_layers("missing") == ()


def test_layer_map_last_write_wins(make_document, shape_layer):
    first = shape_layer([], ind=3, name="first")
    second = shape_layer([], ind=3, name="second")
    composition = composition_from_json(make_document(layers=[first, second]))
    assert [layer.name for layer in composition.layers] == ["first", "second"]
    assert composition.layer_for_id(3).name == "second"
    assert composition.layer_for_id(42) is None


def test_layer_types_and_fields(make_document):
    layers = [
        {"ty": 3, "ind": 1, "nm": "null", "ip": 0, "op": 60},
        {"ty": 1, "ind": 2, "nm": "solid", "sc": "#ff8000", "sw": 20, "sh": 10, "ip": 5, "op": 50,
         "parent": 1, "st": 4, "sr": 2},
        {"ty": 42, "ind": 3, "nm": "future"},
    ]
    composition = composition_from_json(make_document(layers=layers))
    null, solid, unknown = composition.layers
    assert null.layer_type == LayerType.Null
    assert solid.layer_type == LayerType.Solid
    assert solid.solid_color.r == 1
    assert solid.solid_color.g == pytest.approx(128 / 255)
    assert solid.solid_width == 20
    assert solid.parent_id == 1
    assert solid.start_frame == 4
    assert solid.time_stretch == 2
    assert solid.in_frame == 5 and solid.out_frame == 50
    assert unknown.layer_type == LayerType.Unknown
    assert composition.warnings == ["Unknown layer type 42"]


def test_too_many_images_warns_once(make_document):
    document = make_document(
        assets=[_image_asset(i) for i in range(6)],
        layers=[_image_layer(i) for i in range(6)],
    )
    composition = composition_from_json(document)
    assert len(composition.warnings) == 1
    assert "6 images" in composition.warnings[0]
    # Querying again does not add anything
    assert composition.warnings == composition.warnings
    assert len(composition.warnings) == 1


def test_image_assets_alone_trigger_the_warning(make_document):
    composition = composition_from_json(make_document(assets=[_image_asset(i) for i in range(6)]))
    assert len(composition.warnings) == 1


def test_few_images_do_not_warn(make_document):
    document = make_document(
        assets=[_image_asset(i) for i in range(4)],
        layers=[_image_layer(i) for i in range(4)],
    )
    assert composition_from_json(document).warnings == []


def test_image_warning_threshold_is_configurable(make_document):
    document = make_document(assets=[_image_asset(i) for i in range(6)])
    composition = CompositionBuilder(image_warning_threshold=10).build(document)
    assert composition.warnings == []


def test_sealed_composition_rejects_changes(make_document):
    composition = composition_from_json(make_document())
    assert composition.sealed
    with pytest.raises(RuntimeError):
        composition.add_warning("late")
    with pytest.raises(TypeError):
        composition.images["x"] = None


def test_fonts_and_characters(make_document):
    document = make_document(
        fonts={"list": [{"fName": "Roboto-Bold", "fFamily": "Roboto", "fStyle": "Bold", "ascent": 75}]},
        chars=[{
            "ch": "A", "size": 48, "w": 60, "style": "Bold", "fFamily": "Roboto",
            "data": {"shapes": [{"ty": "gr", "nm": "A", "it": [
                {"ty": "sh", "ks": {"k": {"c": True, "v": [[0, 0], [10, 0], [5, 10]],
                                          "i": [[0, 0]] * 3, "o": [[0, 0]] * 3}}},
            ]}]},
        }],
    )
    composition = composition_from_json(document)
    font = composition.fonts["Roboto-Bold"]
    assert font.family == "Roboto"
    assert font.ascent == 75
    character = composition.characters[("A", "Roboto", "Bold")]
    assert character.width == 60
    assert len(character.shapes) == 1
    assert isinstance(character.shapes[0], ShapeGroup)


def test_unknown_shape_type_is_skipped_with_warning(make_document, shape_layer, rect):
    layer = shape_layer([rect(), {"ty": "zz", "nm": "mystery"}])
    composition = composition_from_json(make_document(layers=[layer]))
    assert len(composition.layers[0].shapes) == 1
    assert composition.warnings == ["Unknown shape type zz"]


def test_invalid_asset_is_a_parse_error(make_document):
    with pytest.raises(CompositionParseError) as info:
        composition_from_json(make_document(assets=[{"p": "img.png"}]))
    assert info.value.kind == ErrorKind.PARSE


def test_non_object_document_is_a_parse_error():
    with pytest.raises(CompositionParseError):
        composition_from_json([1, 2, 3])


def test_describe_lists_layers_and_parents(make_document, shape_layer, rect):
    layers = [
        {"ty": 3, "ind": 1, "nm": "root", "ip": 0, "op": 60},
        shape_layer([rect()], ind=2, name="child", parent=1),
    ]
    description = composition_from_json(make_document(layers=layers)).describe()
    assert "child->root" in description
    assert "RectangleShape" in description
