"""
Постобработка: отсечение цветов, заполнение пустых пикселей, сохранение изображений.
"""

import numpy as np
from PIL import Image


def clamp_colors(image):
    """
    Отсечение каналов до диапазона [0, 255] и перевод в 8 бит.

    Дробная часть отбрасывается, как при приведении к uint8.
    """
    return np.clip(image, 0, 255).astype(np.uint8)


def _check_shapes(image, mask):
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Ожидается изображение shape (height, width, 3), получено {image.shape}")
    if mask.shape != image.shape[:2]:
        raise ValueError(f"Маска {mask.shape} не совпадает с изображением {image.shape[:2]}")


def to_rgba(image, mask):
    """
    RGBA изображение: вычисленные пиксели непрозрачны,
    незаполненные - полностью прозрачные (0, 0, 0, 0).
    """
    _check_shapes(image, mask)
    height, width = mask.shape

    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[mask, :3] = clamp_colors(image[mask])
    rgba[mask, 3] = 255
    return rgba


def to_rgb(image, mask, fallback=(255, 255, 255)):
    """RGB изображение: незаполненные пиксели получают цвет fallback."""
    _check_shapes(image, mask)

    rgb = clamp_colors(image)
    rgb[~mask] = np.array(fallback, dtype=np.uint8)
    return rgb


def save_ppm(filename, image, mask, fallback=(255, 255, 255)):
    """
    Сохранение в формате PPM (P3 - текстовый).

    Формат PPM:
    - P3 - магическое число (текстовый RGB)
    - ширина высота
    - максимальное значение (255)
    - RGB значения пикселей
    """
    image_8bit = to_rgb(image, mask, fallback)
    height, width = image_8bit.shape[:2]

    with open(filename, 'w') as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for y in range(height):
            row = []
            for x in range(width):
                r, g, b = image_8bit[y, x]
                row.append(f"{r} {g} {b}")
            f.write(" ".join(row) + "\n")

    print(f"Сохранено: {filename}")


def save_png(filename, image, mask):
    """Сохранение в формате PNG (RGBA, незаполненные пиксели прозрачны)."""
    img = Image.fromarray(to_rgba(image, mask))
    img.save(filename)
    print(f"Сохранено: {filename}")
