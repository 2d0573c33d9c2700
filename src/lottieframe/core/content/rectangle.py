from .shape import GeneratorContent


class RectangleContent(GeneratorContent):
    def __init__(self, layer, shape):
        super().__init__(layer, shape)
        self.position = self.animate(shape.position)
        self.size = self.animate(shape.size)
        self.corner_radius = self.animate(shape.corner_radius)

    def trace(self, path):
        size = self.size.value
        half_width = size.x / 2
        half_height = size.y / 2
        radius = self.corner_radius.value or 0.
        radius = min(radius, half_width, half_height)

        # Drawn clockwise from the top of the right edge
        position = self.position.value
        x, y = position.x, position.y
        path.move_to(x + half_width, y - half_height + radius)
        path.line_to(x + half_width, y + half_height - radius)
        if radius > 0:
            path.arc_to(x + half_width - 2 * radius, y + half_height - 2 * radius,
                        x + half_width, y + half_height, 0, 90)

        path.line_to(x - half_width + radius, y + half_height)
        if radius > 0:
            path.arc_to(x - half_width, y + half_height - 2 * radius,
                        x - half_width + 2 * radius, y + half_height, 90, 90)

        path.line_to(x - half_width, y - half_height + radius)
        if radius > 0:
            path.arc_to(x - half_width, y - half_height,
                        x - half_width + 2 * radius, y - half_height + 2 * radius, 180, 90)

        path.line_to(x + half_width - radius, y - half_height)
        if radius > 0:
            path.arc_to(x + half_width - 2 * radius, y - half_height,
                        x + half_width, y - half_height + 2 * radius, 270, 90)
        path.close()

    @property
    def effective_radius(self):
        size = self.size.value
        return min(self.corner_radius.value or 0., size.x / 2, size.y / 2)
