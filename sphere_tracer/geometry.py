"""
Геометрические примитивы: пересечение луча со сферой.
"""

import numpy as np
from numba import njit
from .math_utils import dot, subtract, unit_vector


@njit(cache=True)
def sphere_intersection(center, radius, ray_origin, ray_dir):
    """
    Пересечение луча со сферой (геометрический метод).

    Параметры:
        center, radius: центр и радиус сферы
        ray_origin: начало луча
        ray_dir: направление луча (нормализованное)

    Возвращает:
        t - расстояние до ближней точки пересечения, или np.inf если
        луч проходит мимо. Отрицательное t не отбрасывается: если начало
        луча внутри сферы или сфера позади, t может быть меньше нуля.
    """
    # Вектор от начала луча к центру сферы
    eye_to_center = subtract(center, ray_origin)

    # Проекция на направление луча
    tca = dot(eye_to_center, ray_dir)
    d2 = dot(eye_to_center, eye_to_center)
    discriminant = radius * radius - d2 + tca * tca

    # Луч проходит мимо
    if discriminant < 0:
        return np.inf

    return tca - np.sqrt(discriminant)


@njit(cache=True)
def sphere_normal(center, hit_point):
    """Нормаль сферы в точке hit_point (единичная, наружу)."""
    return unit_vector(subtract(hit_point, center))
