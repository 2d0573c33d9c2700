import pytest

from lottieframe.core.content import (
    ContentGroup,
    EllipseContent,
    FillContent,
    MergePathsContent,
    RectangleContent,
    RepeaterContent,
    StrokeContent,
)
from lottieframe.core.frame import FillPaint, GradientPaint, StrokePaint
from lottieframe.core.loader import composition_from_json
from lottieframe.core.path import PathMeasure
from lottieframe.core.player import AnimationPlayer
from lottieframe.model.layer import LayerType
from lottieframe.model.shapes import GradientType


def _player(document, **kwargs):
    return AnimationPlayer(composition_from_json(document), **kwargs)


def _trim(start=0, end=100, offset=0, mode=1):
    return {"ty": "tm", "nm": "Trim", "m": mode,
            "s": {"k": start}, "e": {"k": end}, "o": {"k": offset}}


def test_rectangle_radius_clamps_to_half_of_min_side(make_document, shape_layer, rect, fill):
    player = _player(make_document(layers=[shape_layer([rect(size=(100, 50), radius=40), fill])]))
    content = player.layers[0].content_group.contents[0]
    assert isinstance(content, RectangleContent)
    assert content.effective_radius == 25

    path = content.path
    kinds = [segment.kind for segment in path.contours[0].segments]
    assert kinds.count("cubic") == 4
    assert path.bounds() == pytest.approx((-50, -25, 50, 25))
    # Starts at the top of the right edge, right below the top right corner
    assert path.contours[0].start.tolist() == pytest.approx([50, 0])


def test_square_corners_without_radius(make_document, shape_layer, rect, fill):
    player = _player(make_document(layers=[shape_layer([rect(position=(10, 20), size=(100, 50)), fill])]))
    content = player.layers[0].content_group.contents[0]
    contour = content.path.contours[0]
    assert contour.closed
    assert contour.start.tolist() == pytest.approx([60, -5])
    assert all(segment.kind == "line" for segment in contour.segments)
    assert PathMeasure(content.path).length == pytest.approx(300)


def test_ellipse_path(make_document, shape_layer, fill):
    ellipse = {"ty": "el", "nm": "Ellipse", "d": 1, "p": {"k": [10, 10]}, "s": {"k": [100, 100]}}
    player = _player(make_document(layers=[shape_layer([ellipse, fill])]))
    content = player.layers[0].content_group.contents[0]
    assert isinstance(content, EllipseContent)
    path = content.path
    assert len(path.contours[0].segments) == 4
    assert path.bounds() == pytest.approx((-40, -40, 60, 60))
    assert PathMeasure(path).length == pytest.approx(100 * 3.14159265, rel=1e-3)


def test_fill_resolves_paths_into_a_drawable(make_document, shape_layer, rect, fill):
    player = _player(make_document(layers=[shape_layer([rect(), fill])]))
    snapshot = player.snapshot()
    assert len(snapshot.layers) == 1
    layer = snapshot.layers[0]
    assert layer.layer_type == LayerType.Shape
    assert layer.alpha == 255
    assert len(layer.drawables) == 1
    drawable = layer.drawables[0]
    assert isinstance(drawable.paint, FillPaint)
    assert drawable.paint.color.to_argb() == 0xFFFF0000
    assert drawable.path.bounds() == pytest.approx((-50, -25, 50, 25))


def test_simultaneous_trim_applies_to_preceding_paths(make_document, shape_layer, rect, stroke):
    player = _player(make_document(layers=[shape_layer([rect(), _trim(0, 50), stroke])]))
    contents = player.layers[0].content_group.contents
    assert contents[0].trim_path is contents[1]

    drawables = player.snapshot().layers[0].drawables
    assert len(drawables) == 1
    assert isinstance(drawables[0].paint, StrokePaint)
    assert drawables[0].paint.style.width == pytest.approx(2)
    assert PathMeasure(drawables[0].path).length == pytest.approx(150)


def test_individual_trim_is_applied_by_the_stroke(make_document, shape_layer, rect, stroke):
    shapes = [
        rect(position=(0, 0), size=(10, 10), name="a"),
        rect(position=(50, 0), size=(10, 10), name="b"),
        _trim(0, 50, mode=2),
        stroke,
    ]
    player = _player(make_document(layers=[shape_layer(shapes)]))
    # Individual trims leave the generated paths alone
    assert PathMeasure(player.layers[0].content_group.contents[0].path).length == pytest.approx(40)

    drawables = player.snapshot().layers[0].drawables
    assert len(drawables) == 1
    path = drawables[0].path
    assert PathMeasure(path).length == pytest.approx(40)
    assert path.bounds() == pytest.approx((-5, -5, 5, 5))


def test_trim_in_outer_group_reaches_nested_shapes(make_document, shape_layer, rect, stroke):
    group = {"ty": "gr", "nm": "Group", "it": [rect(), {"ty": "tr", "p": {"k": [0, 0]}}]}
    player = _player(make_document(layers=[shape_layer([group, _trim(0, 50), stroke])]))
    drawables = player.snapshot().layers[0].drawables
    assert PathMeasure(drawables[0].path).length == pytest.approx(150)


def test_group_transform_and_opacity(make_document, shape_layer, rect, fill):
    group = {"ty": "gr", "nm": "Group", "it": [
        rect(size=(10, 10)),
        fill,
        {"ty": "tr", "p": {"k": [100, 50]}, "a": {"k": [0, 0]}, "s": {"k": [200, 200]},
         "r": {"k": 0}, "o": {"k": 50}},
    ]}
    player = _player(make_document(layers=[shape_layer([group])]))
    root = player.layers[0].content_group
    assert isinstance(root.contents[0], ContentGroup)

    drawables = player.snapshot().layers[0].drawables
    assert len(drawables) == 1
    assert drawables[0].path.bounds() == pytest.approx((90, 40, 110, 60))
    assert drawables[0].paint.alpha == 127


def test_merge_paths_concatenates(make_document, shape_layer, rect, fill):
    shapes = [
        rect(position=(0, 0), size=(10, 10)),
        rect(position=(5, 0), size=(10, 10)),
        {"ty": "mm", "nm": "Merge", "mm": 1},
        fill,
    ]
    player = _player(make_document(layers=[shape_layer(shapes)]))
    contents = player.layers[0].content_group.contents
    assert [type(content) for content in contents] == [MergePathsContent, FillContent]
    assert len(contents[0].path_contents) == 2
    assert len(contents[0].path.contours) == 2


@pytest.mark.parametrize("mode, bounds", [
    (2, (-5, -5, 10, 5)),
    (3, (-5, -5, 0, 5)),
    (4, (0, -5, 5, 5)),
])
def test_merge_path_boolean_modes(make_document, shape_layer, rect, fill, mode, bounds):
    shapes = [
        rect(position=(0, 0), size=(10, 10)),
        rect(position=(5, 0), size=(10, 10)),
        {"ty": "mm", "nm": "Merge", "mm": mode},
        fill,
    ]
    player = _player(make_document(layers=[shape_layer(shapes)]))
    drawables = player.snapshot().layers[0].drawables
    assert len(drawables) == 1
    assert len(drawables[0].path.contours) == 1
    assert drawables[0].path.bounds() == pytest.approx(bounds)


def test_repeater_copies_preceding_contents(make_document, shape_layer, rect, fill):
    repeater = {
        "ty": "rp", "nm": "Repeater", "c": {"k": 3}, "o": {"k": 0},
        "tr": {"p": {"k": [10, 0]}, "a": {"k": [0, 0]}, "s": {"k": [100, 100]}, "r": {"k": 0},
               "so": {"k": 100}, "eo": {"k": 100}},
    }
    player = _player(make_document(layers=[shape_layer([rect(), repeater, fill])]))
    contents = player.layers[0].content_group.contents
    assert isinstance(contents[0], RepeaterContent)
    assert isinstance(contents[0].group.contents[0], RectangleContent)

    drawables = player.snapshot().layers[0].drawables
    assert len(drawables) == 1
    assert len(drawables[0].path.contours) == 3
    assert drawables[0].path.bounds() == pytest.approx((-50, -25, 70, 25))


def test_repeater_draws_each_copy_with_interpolated_opacity(make_document, shape_layer, rect, fill):
    repeater = {
        "ty": "rp", "nm": "Repeater", "c": {"k": 2}, "o": {"k": 0},
        "tr": {"p": {"k": [10, 0]}, "so": {"k": 100}, "eo": {"k": 0}},
    }
    group = {"ty": "gr", "nm": "Group", "it": [rect(), fill]}
    player = _player(make_document(layers=[shape_layer([group, repeater])]))
    drawables = player.snapshot().layers[0].drawables
    assert [drawable.paint.alpha for drawable in drawables] == [127, 255]
    assert drawables[0].path.bounds() == pytest.approx((-40, -25, 60, 25))


def test_stroke_dashes_scale_with_the_layer(make_document, shape_layer, rect, stroke):
    dashed = dict(stroke, d=[
        {"n": "d", "nm": "dash", "v": {"k": 4}},
        {"n": "g", "nm": "gap", "v": {"k": 0}},
        {"n": "o", "nm": "offset", "v": {"k": 1}},
    ])
    layer = shape_layer([rect(), dashed], ks={"s": {"k": [200, 200]}})
    player = _player(make_document(layers=[layer]))
    style = player.snapshot().layers[0].drawables[0].paint.style
    assert style.width == pytest.approx(4)
    assert style.dashes == pytest.approx((8, .2))
    assert style.dash_offset == pytest.approx(2)
    assert player.layers[0].content_group.contents[1].__class__ is StrokeContent


def test_gradient_fill(make_document, shape_layer, rect):
    gradient = {
        "ty": "gf", "nm": "Gradient", "t": 2, "r": 1,
        "o": {"k": 100},
        "s": {"k": [0, 0]}, "e": {"k": [50, 0]},
        "g": {"p": 2, "k": {"k": [0, 1, 0, 0, 1, 0, 0, 1]}},
    }
    layer = shape_layer([rect(), gradient], ks={"p": {"k": [10, 10]}})
    player = _player(make_document(layers=[layer]))
    paint = player.snapshot().layers[0].drawables[0].paint
    assert isinstance(paint, GradientPaint)
    assert paint.gradient_type == GradientType.Radial
    assert paint.start_point == pytest.approx((10, 10))
    assert paint.end_point == pytest.approx((60, 10))
    assert paint.gradient.positions == [0, 1]
    assert paint.style is None


def test_layer_visibility_follows_in_and_out_frames(make_document, shape_layer, rect, fill):
    layer = shape_layer([rect(), fill], ip=10, op=20)
    player = _player(make_document(layers=[layer]))
    player.set_frame(5)
    assert player.snapshot().layers == []
    player.set_frame(15)
    assert len(player.snapshot().layers) == 1
    player.set_frame(25)
    assert player.snapshot().layers == []


def test_snapshot_is_in_paint_order(make_document, shape_layer, rect, fill):
    layers = [shape_layer([rect(), fill], ind=1, name="top"), shape_layer([rect(), fill], ind=2, name="bottom")]
    snapshot = _player(make_document(layers=layers)).snapshot()
    assert [layer.name for layer in snapshot.layers] == ["bottom", "top"]


def test_parent_transform_is_resolved_by_id(make_document, shape_layer, rect, fill):
    layers = [
        {"ty": 3, "ind": 7, "nm": "parent", "ip": 0, "op": 60, "ks": {"p": {"k": [100, 0]}}},
        shape_layer([rect(), fill], ind=2, name="child", parent=7, ks={"p": {"k": [0, 10]}}),
    ]
    player = _player(make_document(layers=layers))
    assert player.layers[1].parent is player.layer_for_id(7)
    snapshot = player.snapshot()
    # Null layers only contribute their transform
    assert [layer.name for layer in snapshot.layers] == ["child"]
    child = snapshot.layers[0]
    assert (child.matrix.tx, child.matrix.ty) == pytest.approx((100, 10))
    assert child.drawables[0].path.bounds() == pytest.approx((50, -15, 150, 35))


def test_parent_cycle_does_not_loop(make_document, shape_layer, rect, fill):
    layers = [
        shape_layer([rect(), fill], ind=1, name="a", parent=2),
        shape_layer([rect(), fill], ind=2, name="b", parent=1),
    ]
    player = _player(make_document(layers=layers))
    assert len(player.snapshot().layers) == 2


def test_solid_image_and_text_layers(make_document):
    layers = [
        {"ty": 1, "ind": 1, "nm": "solid", "sc": "#0000ff", "sw": 100, "sh": 50, "ip": 0, "op": 60},
        {"ty": 2, "ind": 2, "nm": "image", "refId": "image_0", "ip": 0, "op": 60},
        {"ty": 5, "ind": 3, "nm": "text", "ip": 0, "op": 60,
         "t": {"d": {"k": [{"t": 0, "s": {"t": "Hello", "f": "Roboto", "s": 24, "fc": [1, 0, 0], "j": 2}}]}}},
    ]
    assets = [{"id": "image_0", "w": 10, "h": 10, "u": "", "p": "data:image/png;base64,AAAA", "e": 1}]
    snapshot = _player(make_document(layers=layers, assets=assets)).snapshot()
    text, image, solid = snapshot.layers

    assert solid.drawables[0].path.bounds() == pytest.approx((0, 0, 100, 50))
    assert solid.drawables[0].paint.color.b == 1
    assert image.image.id == "image_0"
    assert image.image.is_embedded
    assert text.text.text == "Hello"
    assert text.text.size == 24
    assert text.text.fill.r == 1


def test_precomp_layer_resolves_children(make_document, shape_layer, rect, fill):
    assets = [{"id": "comp_0", "layers": [shape_layer([rect(), fill], ind=1, name="inner")]}]
    layers = [{"ty": 0, "ind": 1, "nm": "precomp", "refId": "comp_0", "w": 200, "h": 100,
               "ip": 0, "op": 60, "ks": {"p": {"k": [20, 0]}, "o": {"k": 50}}}]
    snapshot = _player(make_document(layers=layers, assets=assets)).snapshot()
    precomp = snapshot.layers[0]
    assert precomp.layer_type == LayerType.PreComp
    assert len(precomp.children) == 1
    inner = precomp.children[0]
    assert inner.alpha == 127
    assert inner.drawables[0].path.bounds() == pytest.approx((-30, -25, 70, 25))
    assert len(list(snapshot.iter_drawables())) == 1


def test_precomp_start_frame_shifts_children(make_document, shape_layer, rect, fill):
    animated = rect()
    animated["s"] = {"a": 1, "k": [{"t": 0, "s": [0, 0]}, {"t": 60, "s": [60, 60]}, {"t": 60}]}
    assets = [{"id": "comp_0", "layers": [shape_layer([animated, fill], ind=1)]}]
    layers = [{"ty": 0, "ind": 1, "refId": "comp_0", "ip": 0, "op": 60, "st": 15}]
    player = _player(make_document(layers=layers, assets=assets))
    player.set_frame(45)
    inner = player.layers[0].layers[0]
    assert inner.content_group.contents[0].size.value.x == pytest.approx(30)


def test_time_stretch_slows_contents(make_document, shape_layer, rect, fill):
    animated = rect()
    animated["s"] = {"a": 1, "k": [{"t": 0, "s": [0, 0]}, {"t": 60, "s": [60, 60]}, {"t": 60}]}
    player = _player(make_document(layers=[shape_layer([animated, fill], sr=2)]))
    player.set_frame(30)
    assert player.layers[0].content_group.contents[0].size.value.x == pytest.approx(15)


def test_changes_request_redraws(make_document, shape_layer, rect, fill):
    animated = rect()
    animated["s"] = {"a": 1, "k": [{"t": 0, "s": [100, 50]}, {"t": 60, "s": [200, 50]}, {"t": 60}]}
    redraws = []
    player = _player(make_document(layers=[shape_layer([animated, fill])]), on_invalidate=lambda: redraws.append(1))
    content = player.layers[0].content_group.contents[0]
    assert content.path.bounds() == pytest.approx((-50, -25, 50, 25))

    before = len(redraws)
    player.set_frame(30)
    assert len(redraws) == before + 1
    assert content.path.bounds() == pytest.approx((-75, -25, 75, 25))

    player.set_frame(30)
    assert len(redraws) == before + 1


def test_static_documents_never_redraw(make_document, shape_layer, rect, fill):
    redraws = []
    player = _player(make_document(layers=[shape_layer([rect(), fill])]), on_invalidate=lambda: redraws.append(1))
    for frame in (0, 10, 59):
        player.set_frame(frame)
    assert redraws == []


def test_teardown_unsubscribes(make_document, shape_layer, rect, fill):
    animated = rect()
    animated["s"] = {"a": 1, "k": [{"t": 0, "s": [100, 50]}, {"t": 60, "s": [200, 50]}, {"t": 60}]}
    player = _player(make_document(layers=[shape_layer([animated, _trim(0, 50), fill])]))
    contents = player.layers[0].content_group.contents
    size = contents[0].size
    trim = contents[1]
    assert size.listener_count == 1
    assert trim._listeners

    player.teardown()
    assert size.listener_count == 0
    assert trim._listeners == []


def test_players_share_a_composition(make_document, shape_layer, rect, fill):
    animated = rect()
    animated["s"] = {"a": 1, "k": [{"t": 0, "s": [100, 50]}, {"t": 60, "s": [200, 50]}, {"t": 60}]}
    composition = composition_from_json(make_document(layers=[shape_layer([animated, fill])]))
    first = AnimationPlayer(composition)
    second = AnimationPlayer(composition)
    first.set_frame(60)
    assert first.layers[0].content_group.contents[0].size.value.x == pytest.approx(200)
    assert second.layers[0].content_group.contents[0].size.value.x == pytest.approx(100)


@pytest.mark.parametrize("start_frame", [0, 10])
def test_time_remap_counts_from_composition_start(make_document, shape_layer, rect, fill, start_frame):
    end_frame = start_frame + 60
    animated = rect()
    # Size equals the current frame
    animated["s"] = {"a": 1, "k": [
        {"t": start_frame, "s": [start_frame, start_frame]},
        {"t": end_frame, "s": [end_frame, end_frame]},
        {"t": end_frame},
    ]}
    inner = shape_layer([animated, fill], ind=1, name="inner", ip=start_frame, op=end_frame)
    assets = [{"id": "comp_0", "layers": [inner]}]
    layers = [{"ty": 0, "ind": 1, "refId": "comp_0", "ip": start_frame, "op": end_frame,
               "tm": {"a": 0, "k": 1}}]
    document = make_document(layers=layers, assets=assets, ip=start_frame, op=end_frame)
    player = _player(document)
    player.set_frame(start_frame + 5)

    child = player.layers[0].layers[0]
    # One second at 30fps
    assert child.frame == pytest.approx(30)
    assert child.content_group.contents[0].size.value.x == pytest.approx(30)
    assert len(player.snapshot().layers[0].children) == 1


def test_animated_trim_without_subscribers_requests_redraw(make_document, shape_layer, rect, fill):
    trim = _trim()
    trim["e"] = {"a": 1, "k": [{"t": 0, "s": [0]}, {"t": 60, "s": [100]}, {"t": 60}]}
    redraws = []
    player = _player(make_document(layers=[shape_layer([trim, rect(), fill])]),
                     on_invalidate=lambda: redraws.append(1))
    assert player.layers[0].content_group.contents[0]._listeners == []

    before = len(redraws)
    player.set_frame(30)
    assert len(redraws) == before + 1
