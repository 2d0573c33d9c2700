import logging

from ...model.shapes import MergePathsMode
from ..path import Path, PathOp
from .base import GreedyContent, PathContent
from .group import ContentGroup

logger = logging.getLogger(__name__)

_path_ops = {
    MergePathsMode.Add: PathOp.UNION,
    MergePathsMode.Subtract: PathOp.REVERSE_DIFFERENCE,
    MergePathsMode.Intersect: PathOp.INTERSECT,
    MergePathsMode.ExcludeIntersections: PathOp.XOR,
}


class MergePathsContent(PathContent, GreedyContent):
    """
    Combines every path content above it in its group into one path.

    ``Merge`` concatenates the outlines; the other modes apply a boolean
    operation between the nearest path and the union of the rest.
    """

    def __init__(self, layer, shape):
        super().__init__(layer, shape.name)
        self.mode = shape.mode
        self.hidden = shape.hidden
        self.path_contents = []

    def absorb_content(self, contents):
        if self not in contents:
            return
        index = contents.index(self)
        # Nearest first
        for content in reversed(contents[:index]):
            if isinstance(content, PathContent):
                self.path_contents.append(content)
                contents.remove(content)

    @property
    def path(self):
        return self.build_path()

    def build_path(self):
        if self.hidden:
            return Path()
        if self.mode == MergePathsMode.Merge:
            return self._add_paths()
        return self._op_first_path_with_rest(_path_ops[self.mode])

    def _paths_of(self, content):
        if isinstance(content, ContentGroup):
            matrix = content.matrix
            return [path.transform(matrix) for path in content.path_list()]
        return [content.path]

    def teardown(self):
        for content in self.path_contents:
            content.teardown()
        super().teardown()

    def _add_paths(self):
        path = Path()
        for content in self.path_contents:
            for child in self._paths_of(content):
                path.add_path(child)
        return path

    def _op_first_path_with_rest(self, op):
        if not self.path_contents:
            return Path()
        remainder = Path()
        for content in reversed(self.path_contents[1:]):
            for child in self._paths_of(content):
                remainder.add_path(child)

        first = Path()
        for child in self._paths_of(self.path_contents[0]):
            first.add_path(child)
            first.fill_type = child.fill_type

        result = first.op(remainder, op)
        logger.debug("Merged %s paths with %s", len(self.path_contents), op.name)
        return result
