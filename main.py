"""
Sphere Tracer - синтез изображений методом обратной трассировки лучей.

Сцена из случайно расставленных сфер, один точечный источник света,
фоновое + диффузное (Ламберт) + зеркальное освещение.

Запуск: python main.py
"""

import time
from sphere_tracer import create_random_scene, render, save_png, save_ppm


# ==================== КОНФИГУРАЦИЯ ====================
# Параметры можно изменить для получения разных результатов

CONFIG = {
    # --- Параметры рендеринга ---
    'width': 800,               # ширина изображения
    'height': 600,              # высота изображения

    # --- Камера ---
    'camera_position': [0, 1.8, 10],   # позиция камеры
    'camera_look_at': [0, 3.0, 0],     # точка, куда смотрит камера
    'camera_fov': 45.0,                # угол обзора (градусы)

    # --- Сферы ---
    'seed': None,                      # None - новая сцена при каждом запуске
    'sphere_count': 10,                # количество сфер
    'sphere_area': 4.0,                # центры в кубе [0, area)
    'sphere_min_radius': 0.3,
    'sphere_radius_spread': 0.4,       # радиус в [min, min + spread)
    'sphere_color': [255.0, 255.0, 255.0],
    'sphere_specular': 0.7,            # зеркальность
    'sphere_lambert': 0.3,             # диффузность
    'sphere_ambient': 0.1,             # фоновое освещение

    # --- Источники света ---
    'lights': [[-30, -10, 20]],

    # --- Вывод ---
    'output_png': 'out.png',
    'output_ppm': 'out.ppm',
    'fallback_color': [255, 255, 255], # цвет пикселей без результата (PPM)
}


def main():
    """Основная функция рендеринга."""

    print("=" * 60)
    print("Sphere Tracer - Трассировка лучей")
    print("=" * 60)

    # 1. Создаём сцену
    print("\n[1/3] Создание сцены...")
    scene = create_random_scene(CONFIG)
    print(f"      Сцена: {len(scene.spheres)} сфер, {len(scene.lights)} источников света")

    # 2. Рендеринг
    print(f"[2/3] Рендеринг {CONFIG['width']}x{CONFIG['height']}...")

    start_time = time.time()

    image, mask = render(scene, CONFIG['width'], CONFIG['height'])

    elapsed = time.time() - start_time
    print(f"      Завершено за {elapsed:.1f} секунд")

    # 3. Сохранение
    print("[3/3] Сохранение...")
    save_png(CONFIG['output_png'], image, mask)
    save_ppm(CONFIG['output_ppm'], image, mask, fallback=CONFIG['fallback_color'])

    print("\n" + "=" * 60)
    print("Готово!")
    print("=" * 60)


if __name__ == "__main__":
    main()
