import numpy as np
import pytest

from sphere_tracer.camera import Viewport
from sphere_tracer.math_utils import vec3, dot, unit_vector, subtract
from sphere_tracer.postprocess import to_rgb
from sphere_tracer.renderer import (
    TRACE_HIT, TRACE_MISS, TRACE_DEPTH_EXCEEDED,
    is_light_visible, lambert_amount, render, shade, trace_ray,
)
from sphere_tracer.scene import Camera, Sphere, Scene


def make_camera():
    return Camera(point=(0, 0, 10), vector=(0, 0, 0), field_of_view=45)


def test_miss_returns_white_background():
    scene = Scene(make_camera(), [Sphere((0, 0, 0), (10, 20, 30), 0, 0.5, 0.1, 1)], [(0, 10, 10)])

    status, color = trace_ray(scene, (0, 0, 10), (0, 1, 0))

    assert status == TRACE_MISS
    assert np.allclose(color, [255.0, 255.0, 255.0])


def test_ambient_only_sphere_renders_its_color():
    sphere = Sphere((0, 0, 0), (200, 100, 50), specular=0, lambert=0, ambient=1, radius=1)
    scene = Scene(make_camera(), [sphere], [(0, 10, 10), (-5, 0, 3)])

    status, color = trace_ray(scene, (0, 0, 10), (0, 0, -1))

    assert status == TRACE_HIT
    assert np.allclose(color, [200.0, 100.0, 50.0])


def test_lambert_adds_cosine_weighted_color():
    sphere = Sphere((0, 0, 0), (100, 100, 100), specular=0, lambert=0.5, ambient=0.1, radius=1)
    scene = Scene(make_camera(), [sphere], [(0, 0, 10)])

    status, color = trace_ray(scene, (0, 0, 10), (0, 0, -1))

    # Свет прямо по нормали: cos = 1
    assert status == TRACE_HIT
    assert np.allclose(color, [60.0, 60.0, 60.0])


def test_shadow_blocks_occluded_light():
    centers = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 5.0]])
    radii = np.array([1.0, 1.0])
    point = vec3(0, 0, 1)
    normal = vec3(0, 0, 1)
    lights = np.array([[0.0, 0.0, 10.0]])

    assert not is_light_visible(point, lights[0], centers, radii)
    assert lambert_amount(point, normal, centers, radii, lights) == 0.0

    # Без препятствия вклад положительный
    assert is_light_visible(point, lights[0], centers[:1], radii[:1])
    assert lambert_amount(point, normal, centers[:1], radii[:1], lights) > 0.0


def test_lambert_sums_over_visible_lights_only():
    centers = np.array([[0.0, 0.0, 0.0]])
    radii = np.array([1.0])
    point = vec3(0, 1, 0)
    normal = vec3(0, 1, 0)
    lights = np.array([[0.0, 10.0, 0.0], [10.0, 1.0, 0.0], [0.0, -10.0, 0.0]])

    amount = lambert_amount(point, normal, centers, radii, lights)

    # Верхний свет: cos = 1, боковой: cos = 0, нижний закрыт самой сферой
    assert amount == pytest.approx(1.0)


def test_shade_without_lambert_ignores_lights():
    centers = np.array([[0.0, 0.0, 0.0]])
    radii = np.array([1.0])
    lights = np.array([[0.0, 0.0, 10.0]])

    color = shade(vec3(0, 0, 1), vec3(0, 0, 1), vec3(10, 20, 30), 0.0, 0.5,
                  centers, radii, lights)

    assert np.allclose(color, [5.0, 10.0, 15.0])


def test_facing_mirrors_terminate_within_depth_cap():
    mirror = dict(color=(255, 255, 255), specular=1.0, lambert=0.0, ambient=0.1, radius=1.0)
    scene = Scene(make_camera(), [Sphere(point=(0, 0, -3), **mirror),
                                  Sphere(point=(0, 0, 3), **mirror)], [(0, 10, 0)])

    status, color = trace_ray(scene, (0, 0, 0), (0, 0, -1))

    # Глубины 0..3 дают по одной фоновой составляющей каждая
    assert status == TRACE_HIT
    assert np.allclose(color, 4 * 0.1 * 255.0)


def test_reflections_are_weighted_by_specular():
    mirror = dict(color=(255, 255, 255), specular=0.5, lambert=0.0, ambient=0.1, radius=1.0)
    scene = Scene(make_camera(), [Sphere(point=(0, 0, -3), **mirror),
                                  Sphere(point=(0, 0, 3), **mirror)], [(0, 10, 0)])

    status, color = trace_ray(scene, (0, 0, 0), (0, 0, -1))

    # Каждое отражение ослабляется в specular раз
    assert status == TRACE_HIT
    assert np.allclose(color, 0.1 * 255.0 * (1 + 0.5 + 0.25 + 0.125))


def test_mirror_reflects_scaled_color_of_neighbour():
    s = np.sqrt(0.5)
    hit_point = vec3(0, 0, 1)
    incoming = vec3(s, 0, -s)
    # reflect даёт (-s, 0, -s); соседняя сфера лежит на этой прямой позади точки
    neighbour_center = hit_point + 5.0 * vec3(s, 0, s)

    mirror = Sphere((0, 0, 0), (100, 100, 100), specular=0.5, lambert=0, ambient=0.1, radius=1)
    neighbour = Sphere(neighbour_center, (200, 0, 0), specular=0, lambert=0, ambient=1, radius=1)
    scene = Scene(make_camera(), [mirror, neighbour], [])

    status, color = trace_ray(scene, hit_point - 10.0 * incoming, incoming)

    assert status == TRACE_HIT
    assert np.allclose(color, [10.0 + 0.5 * 200.0, 10.0, 10.0])


def test_depth_exceeded_produces_no_color():
    sphere = Sphere((0, 0, 0), (200, 100, 50), specular=0.5, lambert=0.5, ambient=0.1, radius=1)
    scene = Scene(make_camera(), [sphere], [(0, 10, 10)])

    status, color = trace_ray(scene, (0, 0, 10), (0, 0, -1), depth=4)
    assert status == TRACE_DEPTH_EXCEEDED
    assert np.allclose(color, 0.0)

    # Промах проверяется раньше глубины
    status, _ = trace_ray(scene, (0, 0, 10), (0, 1, 0), depth=4)
    assert status == TRACE_MISS


def test_forced_depth_leaves_hit_pixels_unset():
    sphere = Sphere((0, 0, 0), (200, 100, 50), specular=0.5, lambert=0.5, ambient=0.1, radius=1)
    scene = Scene(make_camera(), [sphere], [(0, 10, 10)])

    image, mask = render(scene, 21, 21, start_depth=4)

    # Центр попадает в сферу и остаётся без цвета, угол - фон
    assert not mask[10, 10]
    assert np.allclose(image[10, 10], 0.0)
    assert mask[0, 0]
    assert np.allclose(image[0, 0], 255.0)

    rgb = to_rgb(image, mask, fallback=(1, 2, 3))
    assert rgb[10, 10].tolist() == [1, 2, 3]


def test_render_single_sphere_scene():
    camera = Camera(point=(0, 1.8, 10), vector=(0, 3, 0), field_of_view=45)
    sphere = Sphere((0, 2, 0), (200, 100, 50), specular=0, lambert=0.7, ambient=0.1, radius=1)
    scene = Scene(camera, [sphere], [(-30, -10, 20)])
    width, height = 800, 600

    image, mask = render(scene, width, height)

    assert image.shape == (height, width, 3)
    assert mask.all()

    # Проекция центра сферы на экран
    viewport = Viewport(camera, width, height)
    to_center = subtract(np.array(sphere.point), viewport.position)
    on_plane = to_center / dot(to_center, viewport.forward)
    x = int(round((dot(on_plane, viewport.right) + viewport.half_width) / viewport.pixel_width))
    y = int(round((dot(on_plane, viewport.up) + viewport.half_height) / viewport.pixel_height))

    _, direction = viewport.ray(x, y)
    assert np.allclose(direction, unit_vector(to_center), atol=1e-2)
    assert not np.allclose(image[y, x], 255.0)
    assert image[y, x][0] >= 19.9

    for cy, cx in [(0, 0), (0, width - 1), (height - 1, 0), (height - 1, width - 1)]:
        assert np.allclose(image[cy, cx], 255.0)
