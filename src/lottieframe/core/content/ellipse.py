from .shape import GeneratorContent

ELLIPSE_CONTROL_POINT_PERCENTAGE = 0.5522848


class EllipseContent(GeneratorContent):
    """Ellipse as four cubic quadrants starting at the top."""

    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.is_reversed = shape.is_reversed
        self.position = self.animate(shape.position)
        self.size = self.animate(shape.size)

    def trace(self, path):
        size = self.size.value
        half_width = size.x / 2
        half_height = size.y / 2
        cp_w = half_width * ELLIPSE_CONTROL_POINT_PERCENTAGE
        cp_h = half_height * ELLIPSE_CONTROL_POINT_PERCENTAGE

        path.move_to(0, -half_height)
        if self.is_reversed:
            path.cubic_to(-cp_w, -half_height, -half_width, -cp_h, -half_width, 0)
            path.cubic_to(-half_width, cp_h, -cp_w, half_height, 0, half_height)
            path.cubic_to(cp_w, half_height, half_width, cp_h, half_width, 0)
            path.cubic_to(half_width, -cp_h, cp_w, -half_height, 0, -half_height)
        else:
            path.cubic_to(cp_w, -half_height, half_width, -cp_h, half_width, 0)
            path.cubic_to(half_width, cp_h, cp_w, half_height, 0, half_height)
            path.cubic_to(-cp_w, half_height, -half_width, cp_h, -half_width, 0)
            path.cubic_to(-half_width, -cp_h, -cp_w, -half_height, 0, -half_height)

        position = self.position.value
        path.offset(position.x, position.y)
        path.close()
