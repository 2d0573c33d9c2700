from ...utils.transform import TransformMatrix
from ..animation import TransformKeyframeAnimation
from ..path import Path
from .base import DrawingContent, GreedyContent, PathContent, alpha_for


class ContentGroup(PathContent, DrawingContent):
    """
    Ordered contents sharing an optional transform.

    Used for ``gr`` items, for the root of a shape layer and for the
    contents copied by a repeater.
    """

    def __init__(self, layer, name, contents, transform=None, hidden=False):
        super().__init__(layer, name)
        self.hidden = hidden
        self.contents = list(contents)
        self.transform = None
        if transform is not None:
            self.transform = TransformKeyframeAnimation(transform)
            self.transform.add_animations_to(layer)
            self.transform.add_listener(self.on_value_changed)

        greedy = [content for content in self.contents if isinstance(content, GreedyContent)]
        for content in reversed(greedy):
            content.absorb_content(self.contents)

    def set_contents(self, contents_before, contents_after):
        # Trim paths of enclosing groups apply to nested contents too
        contents_before = list(contents_before)
        for index in range(len(self.contents) - 1, -1, -1):
            content = self.contents[index]
            content.set_contents(list(contents_before), self.contents[:index])
            contents_before.append(content)

    @property
    def matrix(self):
        if self.transform is None:
            return TransformMatrix()
        return self.transform.matrix

    @property
    def path_contents(self):
        return [content for content in self.contents if isinstance(content, PathContent)]

    def path_list(self):
        """Paths of the direct children, untransformed, in evaluation order."""
        return [content.path for content in reversed(self.path_contents)]

    @property
    def path(self):
        # Children keep their own caches
        return self.build_path()

    def build_path(self):
        path = Path()
        if self.hidden:
            return path
        matrix = self.matrix
        for content in reversed(self.path_contents):
            path.add_path(content.path, matrix)
        return path

    def draw(self, parent_matrix, parent_alpha):
        if self.hidden:
            return []
        matrix = parent_matrix
        alpha = parent_alpha
        if self.transform is not None:
            matrix = self.transform.matrix * parent_matrix
            alpha = alpha_for(parent_alpha, self.transform.opacity.value)

        drawables = []
        for content in reversed(self.contents):
            if isinstance(content, DrawingContent):
                drawables.extend(content.draw(matrix, alpha))
        return drawables

    def teardown(self):
        if self.transform is not None:
            self.transform.remove_listener(self.on_value_changed)
        for content in self.contents:
            content.teardown()
        super().teardown()
