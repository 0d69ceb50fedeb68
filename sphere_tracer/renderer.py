"""
Ядро рендеринга методом обратной трассировки лучей (Whitted-style).

Цвет точки = фоновая (ambient) + диффузная (Ламберт, с тенями)
           + зеркальная (отражённый луч) составляющие.
Цвет не ограничивается сверху: отсечение до 255 выполняется при сохранении.
"""

import numpy as np
from numba import njit, prange
from .math_utils import add, dot, reflect, scale, subtract, unit_vector
from .geometry import sphere_normal
from .scene import intersect_scene
from .camera import Viewport, get_ray

# Результат трассировки луча
TRACE_HIT = 0              # луч попал в сферу, цвет вычислен
TRACE_MISS = 1             # луч ушёл в пустоту, цвет фона
TRACE_DEPTH_EXCEEDED = 2   # превышена глубина отражений, цвета нет

MAX_DEPTH = 3              # максимальная глубина отражений
SHADOW_TOLERANCE = -0.005  # порог теневого теста (поглощает самопересечение)
BACKGROUND = 255.0         # фон белый


@njit(cache=True)
def is_light_visible(point, light, centers, radii):
    """
    Теневой тест: виден ли источник света light из точки point.

    Луч направлен ОТ источника (point - light). Сфера-препятствие между
    точкой и источником оказывается позади начала луча и даёт заметно
    отрицательное расстояние; собственная сфера даёт расстояние около нуля.
    """
    direction = unit_vector(subtract(point, light))
    t, _ = intersect_scene(point, direction, centers, radii)
    return t > SHADOW_TOLERANCE


@njit(cache=True)
def lambert_amount(point, normal, centers, radii, lights):
    """Суммарный косинус Ламберта по всем видимым источникам света."""
    amount = 0.0
    for i in range(lights.shape[0]):
        if not is_light_visible(point, lights[i], centers, radii):
            continue
        contribution = dot(unit_vector(subtract(lights[i], point)), normal)
        if contribution > 0:
            amount += contribution
    return amount


@njit(cache=True)
def shade(hit_point, normal, color, lambert, ambient, centers, radii, lights):
    """
    Локальное освещение точки: фоновая + диффузная составляющие.

    Зеркальная составляющая добавляется в trace, который продолжает
    отражённый луч с глубиной depth + 1.
    """
    result = scale(color, ambient)

    if lambert > 0:
        amount = lambert_amount(hit_point, normal, centers, radii, lights)
        result = add(result, scale(color, amount * lambert))

    return result


@njit(cache=True)
def trace(ray_origin, ray_dir, centers, radii, colors,
          specular, lambert, ambient, lights, depth):
    """
    Трассировка луча с отражениями.

    Рекурсия color(d) = local(d) + specular * color(d + 1) развёрнута в цикл
    с накоплением веса отражения. Отражённый луч, ушедший в пустоту или
    превысивший MAX_DEPTH, ничего не добавляет.

    Возвращает: (status, color)
        status: TRACE_HIT, TRACE_MISS или TRACE_DEPTH_EXCEEDED
        color: цвет (для TRACE_MISS - белый фон, для TRACE_DEPTH_EXCEEDED - нули)
    """
    color = np.zeros(3)
    weight = 1.0              # произведение коэффициентов отражения по пути
    start_depth = depth

    current_origin = ray_origin.copy()
    current_dir = ray_dir.copy()

    while True:
        # 1. Ищем пересечение со сценой
        t, idx = intersect_scene(current_origin, current_dir, centers, radii)

        # Луч ушёл в пустоту
        if idx < 0:
            if depth == start_depth:
                return TRACE_MISS, np.full(3, BACKGROUND)
            break

        # 2. Ограничение глубины
        if depth > MAX_DEPTH:
            if depth == start_depth:
                return TRACE_DEPTH_EXCEEDED, np.zeros(3)
            break

        # 3. Локальное освещение
        hit_point = add(current_origin, scale(current_dir, t))
        normal = sphere_normal(centers[idx], hit_point)
        local = shade(hit_point, normal, colors[idx], lambert[idx], ambient[idx],
                      centers, radii, lights)
        color = add(color, scale(local, weight))

        # 4. Зеркальное отражение
        if specular[idx] <= 0:
            break

        weight = weight * specular[idx]
        current_dir = reflect(current_dir, normal)
        current_origin = hit_point
        depth += 1

    return TRACE_HIT, color


@njit(parallel=True, cache=True)
def render_image(width, height,
                 cam_position, cam_forward, cam_right, cam_up,
                 cam_half_width, cam_half_height,
                 cam_pixel_width, cam_pixel_height,
                 centers, radii, colors, specular, lambert, ambient, lights,
                 start_depth):
    """
    Рендеринг изображения.

    Возвращает:
        image: shape (height, width, 3) - цвет пикселя image[y, x], без отсечения
        mask: shape (height, width) - True, если цвет пикселя вычислен

    Строки обрабатываются параллельно; каждая строка пишет только свои пиксели.
    """
    image = np.zeros((height, width, 3))
    mask = np.zeros((height, width), dtype=np.bool_)

    # Параллельный цикл по строкам
    for y in prange(height):
        for x in range(width):
            origin, direction = get_ray(
                x, y, cam_position, cam_forward, cam_right, cam_up,
                cam_half_width, cam_half_height,
                cam_pixel_width, cam_pixel_height
            )

            status, color = trace(
                origin, direction, centers, radii, colors,
                specular, lambert, ambient, lights, start_depth
            )

            # Пиксель без цвета остаётся незаполненным
            if status != TRACE_DEPTH_EXCEEDED:
                image[y, x] = color
                mask[y, x] = True

    return image, mask


def trace_ray(scene, origin, direction, depth: int = 0):
    """Трассировка одного луча по сцене. Возвращает (status, color)."""
    return trace(
        np.asarray(origin, dtype=np.float64),
        np.asarray(direction, dtype=np.float64),
        *scene.arrays, depth
    )


def render(scene, width: int, height: int, start_depth: int = 0):
    """
    Рендеринг сцены в растр width x height.

    Возвращает (image, mask), см. render_image.
    """
    viewport = Viewport(scene.camera, width, height)

    return render_image(
        width, height,
        viewport.position, viewport.forward, viewport.right, viewport.up,
        viewport.half_width, viewport.half_height,
        viewport.pixel_width, viewport.pixel_height,
        *scene.arrays, start_depth
    )
