"""
Сцена: камера, сферы и точечные источники света.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
from numba import njit
from .geometry import sphere_intersection


def _as_triple(value) -> Tuple[float, float, float]:
    x, y, z = value
    return float(x), float(y), float(z)


@dataclass(frozen=True)
class Camera:
    """
    Описание камеры.

    Параметры:
        point: позиция глаза
        vector: точка, на которую смотрит камера (не направление!)
        field_of_view: угол обзора в градусах
    """
    point: Tuple[float, float, float]
    vector: Tuple[float, float, float]
    field_of_view: float

    def __post_init__(self):
        object.__setattr__(self, 'point', _as_triple(self.point))
        object.__setattr__(self, 'vector', _as_triple(self.vector))
        object.__setattr__(self, 'field_of_view', float(self.field_of_view))


@dataclass(frozen=True)
class Sphere:
    """
    Сфера с материалом.

    Параметры:
        point: центр
        color: цвет RGB, компоненты в [0, 255]
        specular: коэффициент зеркального отражения
        lambert: коэффициент диффузного отражения (Ламберт)
        ambient: коэффициент фонового освещения
        radius: радиус
    """
    point: Tuple[float, float, float]
    color: Tuple[float, float, float]
    specular: float
    lambert: float
    ambient: float
    radius: float

    def __post_init__(self):
        object.__setattr__(self, 'point', _as_triple(self.point))
        object.__setattr__(self, 'color', _as_triple(self.color))
        for name in ('specular', 'lambert', 'ambient', 'radius'):
            object.__setattr__(self, name, float(getattr(self, name)))


@dataclass(frozen=True)
class Scene:
    """
    Контейнер для 3D сцены. После создания не изменяется.

    Хранит:
        - Камеру
        - Сферы (порядок важен: при равных расстояниях побеждает первая)
        - Точечные источники света (только позиция)

    При создании сцена компилируется в numpy массивы для numba-ядер:
        centers:  shape (n_spheres, 3)
        radii:    shape (n_spheres,)
        colors:   shape (n_spheres, 3)
        specular, lambert, ambient: shape (n_spheres,)
        lights:   shape (n_lights, 3)
    """
    camera: Camera
    spheres: Tuple[Sphere, ...] = ()
    lights: Tuple[Tuple[float, float, float], ...] = ()
    _arrays: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'spheres', tuple(self.spheres))
        object.__setattr__(self, 'lights', tuple(_as_triple(p) for p in self.lights))
        object.__setattr__(self, '_arrays', self._compile())

    def _compile(self):
        n_spheres = len(self.spheres)

        centers = np.zeros((n_spheres, 3), dtype=np.float64)
        colors = np.zeros((n_spheres, 3), dtype=np.float64)
        radii = np.zeros(n_spheres, dtype=np.float64)
        specular = np.zeros(n_spheres, dtype=np.float64)
        lambert = np.zeros(n_spheres, dtype=np.float64)
        ambient = np.zeros(n_spheres, dtype=np.float64)
        for i, sphere in enumerate(self.spheres):
            centers[i] = sphere.point
            colors[i] = sphere.color
            radii[i] = sphere.radius
            specular[i] = sphere.specular
            lambert[i] = sphere.lambert
            ambient[i] = sphere.ambient

        lights = np.zeros((len(self.lights), 3), dtype=np.float64)
        for i, light in enumerate(self.lights):
            lights[i] = light

        arrays = (centers, radii, colors, specular, lambert, ambient, lights)
        # Массивы должны совпадать со сферами сцены
        for arr in arrays:
            arr.flags.writeable = False
        return arrays

    @property
    def arrays(self):
        """
        Массивы сцены в порядке, в котором их принимают ядра рендерера:
        (centers, radii, colors, specular, lambert, ambient, lights).
        """
        return self._arrays

    def intersect(self, origin, direction) -> Tuple[float, Optional[Sphere]]:
        """
        Ближайшее пересечение луча со сценой.

        Возвращает (distance, sphere); если пересечения нет - (inf, None).
        """
        centers, radii = self._arrays[0], self._arrays[1]
        distance, index = intersect_scene(
            np.asarray(origin, dtype=np.float64),
            np.asarray(direction, dtype=np.float64),
            centers, radii
        )
        if index < 0:
            return distance, None
        return distance, self.spheres[index]


@njit(cache=True)
def intersect_scene(ray_origin, ray_dir, centers, radii):
    """
    Поиск ближайшего пересечения луча со сценой.

    Перебирает все сферы и находит минимальное расстояние.
    Сравнение строгое: при равенстве побеждает сфера с меньшим индексом.

    Возвращает: (t, sphere_index)
        t: расстояние до пересечения (np.inf если нет)
        sphere_index: индекс сферы (-1 если нет пересечения)
    """
    closest_t = np.inf
    hit_idx = -1

    for i in range(centers.shape[0]):
        t = sphere_intersection(centers[i], radii[i], ray_origin, ray_dir)
        if t < closest_t:
            closest_t = t
            hit_idx = i

    return closest_t, hit_idx
