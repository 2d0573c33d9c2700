from ..animation import TransformKeyframeAnimation
from ..path import Path
from .base import DrawingContent, GreedyContent, PathContent, alpha_for
from .group import ContentGroup


class RepeaterContent(PathContent, DrawingContent, GreedyContent):
    """
    Repeats every content above it in its group.

    Copy ``i`` is drawn with the repeater transform applied ``i + offset``
    times and an opacity interpolated from the start to the end opacity.
    """

    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.hidden = shape.hidden
        self.group = None
        self.copies = self.animate(shape.copies)
        self.offset = self.animate(shape.offset)
        self.transform = TransformKeyframeAnimation(shape.transform.transform)
        self.transform.add_animations_to(layer)
        self.transform.add_listener(self.on_value_changed)
        self.start_opacity = self.animate(shape.transform.start_opacity)
        self.end_opacity = self.animate(shape.transform.end_opacity)

    def absorb_content(self, contents):
        # A repeater only ever absorbs once
        if self.group is not None:
            return
        index = contents.index(self)
        absorbed = contents[:index]
        del contents[:index]
        self.group = ContentGroup(self.layer, "Repeater", absorbed, hidden=self.hidden)

    def set_contents(self, contents_before, contents_after):
        self.group.set_contents(contents_before, contents_after)

    def _copy_matrices(self):
        copies = int(self.copies.value)
        offset = self.offset.value
        for i in range(copies - 1, -1, -1):
            yield i, self.transform.matrix_for_repeater(i + offset)

    @property
    def path(self):
        return self.build_path()

    def build_path(self):
        path = Path()
        if self.hidden:
            return path
        content_path = self.group.path
        for _, matrix in self._copy_matrices():
            path.add_path(content_path, matrix)
        return path

    def draw(self, parent_matrix, parent_alpha):
        if self.hidden:
            return []
        copies = self.copies.value
        start_opacity = self.start_opacity.value / 100
        end_opacity = self.end_opacity.value / 100
        drawables = []
        for i, matrix in self._copy_matrices():
            fraction = i / copies if copies else 0.
            opacity = start_opacity + (end_opacity - start_opacity) * fraction
            alpha = alpha_for(parent_alpha, opacity * 100)
            drawables.extend(self.group.draw(matrix * parent_matrix, alpha))
        return drawables

    def teardown(self):
        self.transform.remove_listener(self.on_value_changed)
        if self.group is not None:
            self.group.teardown()
        super().teardown()
