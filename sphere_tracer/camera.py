"""
Точечная (pinhole) камера: генерация первичных лучей.
"""

import numpy as np
from numba import njit
from .math_utils import add3, cross, scale, subtract, unit_vector

WORLD_UP = np.array([0.0, 1.0, 0.0])


class Viewport:
    """
    Виртуальный экран камеры для растра заданного размера.

    Параметры:
        camera: описание камеры (scene.Camera)
        width, height: размер изображения в пикселях (оба не меньше 2)
    """

    def __init__(self, camera, width: int, height: int):
        if width < 2 or height < 2:
            raise ValueError(f"Размер растра должен быть не меньше 2x2, получено {width}x{height}")

        self.position = np.array(camera.point, dtype=np.float64)
        self.width = width
        self.height = height

        # Базис камеры (forward, right, up)
        look_at = np.array(camera.vector, dtype=np.float64)
        self.forward = unit_vector(subtract(look_at, self.position))
        self.right = unit_vector(cross(self.forward, WORLD_UP))
        self.up = unit_vector(cross(self.right, self.forward))

        # Размер экрана в мировых координатах.
        # Соотношение сторон применяется к высоте, а не к ширине.
        fov_radians = np.pi * (camera.field_of_view / 2.0) / 180.0
        self.half_width = np.tan(fov_radians)
        self.half_height = (height / width) * self.half_width
        self.pixel_width = self.half_width * 2.0 / (width - 1.0)
        self.pixel_height = self.half_height * 2.0 / (height - 1.0)

    def ray(self, x: int, y: int):
        """Луч через пиксель (x, y). Возвращает (origin, direction)."""
        return get_ray(x, y, self.position, self.forward, self.right, self.up,
                       self.half_width, self.half_height,
                       self.pixel_width, self.pixel_height)


@njit(cache=True)
def get_ray(x, y, position, forward, right, up,
            half_width, half_height, pixel_width, pixel_height):
    """
    Генерирует луч из камеры через пиксель (x, y).

    Возвращает:
        (origin, direction) - начало и нормализованное направление луча
    """
    x_comp = scale(right, x * pixel_width - half_width)
    y_comp = scale(up, y * pixel_height - half_height)
    direction = unit_vector(add3(forward, x_comp, y_comp))

    return position.copy(), direction
