"""
Создание сцены со случайно расставленными сферами.
"""

import numpy as np
from .scene import Camera, Scene, Sphere


def random_sphere(rng, config: dict) -> Sphere:
    """Сфера со случайным центром в кубе [0, area) и случайным радиусом."""
    area = config.get('sphere_area', 4.0)
    min_radius = config.get('sphere_min_radius', 0.3)
    radius_spread = config.get('sphere_radius_spread', 0.4)

    # Порядок выборки: x, y, z, затем радиус
    center = rng.random(3) * area
    radius = min_radius + rng.random() * radius_spread

    return Sphere(
        point=center,
        color=config.get('sphere_color', [255.0, 255.0, 255.0]),
        specular=config.get('sphere_specular', 0.7),
        lambert=config.get('sphere_lambert', 0.3),
        ambient=config.get('sphere_ambient', 0.1),
        radius=radius,
    )


def create_random_scene(config: dict) -> Scene:
    """
    Создаёт сцену из случайных сфер, камеры и одного источника света.
    Параметры настраиваются через словарь config.

    Случайность берётся только из config['seed']: одинаковый seed
    даёт одинаковую сцену, None - новую сцену при каждом запуске.
    """
    rng = np.random.default_rng(config.get('seed'))

    spheres = [random_sphere(rng, config)
               for _ in range(config.get('sphere_count', 10))]

    camera = Camera(
        point=config.get('camera_position', [0, 1.8, 10]),
        vector=config.get('camera_look_at', [0, 3.0, 0]),
        field_of_view=config.get('camera_fov', 45.0),
    )

    lights = config.get('lights', [[-30, -10, 20]])

    return Scene(camera=camera, spheres=spheres, lights=lights)
