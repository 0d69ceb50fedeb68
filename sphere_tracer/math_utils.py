"""
Математические утилиты для работы с 3D векторами.
Оптимизировано с помощью numba для ускорения.

Вектор - numpy array shape (3,), dtype float64.
Все функции возвращают новый массив и не изменяют аргументы.
"""

import numpy as np
from numba import njit

# Тип для 3D вектора: numpy array shape (3,)
Vec3 = np.ndarray


def vec3(x, y, z) -> Vec3:
    """Создаёт вектор из трёх компонент."""
    return np.array([x, y, z], dtype=np.float64)


@njit(cache=True, fastmath=True)
def add(a, b):
    """Сумма двух векторов."""
    return np.array([a[0] + b[0], a[1] + b[1], a[2] + b[2]])


@njit(cache=True, fastmath=True)
def add3(a, b, c):
    """Сумма трёх векторов."""
    return np.array([
        a[0] + b[0] + c[0],
        a[1] + b[1] + c[1],
        a[2] + b[2] + c[2]
    ])


@njit(cache=True, fastmath=True)
def subtract(a, b):
    """Разность векторов a - b."""
    return np.array([a[0] - b[0], a[1] - b[1], a[2] - b[2]])


@njit(cache=True, fastmath=True)
def scale(a, t):
    """Умножение вектора на скаляр."""
    return np.array([a[0] * t, a[1] * t, a[2] * t])


@njit(cache=True, fastmath=True)
def dot(a, b):
    """Скалярное произведение двух векторов."""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@njit(cache=True, fastmath=True)
def cross(a, b):
    """Векторное произведение двух векторов (правая тройка)."""
    return np.array([
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0]
    ])


@njit(cache=True, fastmath=True)
def length(v):
    """Длина вектора."""
    return np.sqrt(dot(v, v))


@njit(cache=True)
def unit_vector(v):
    """
    Нормализация вектора (приведение к единичной длине).

    Для нулевого вектора не определена: вызывающий код
    не должен передавать вектор нулевой длины.
    """
    return scale(v, 1.0 / length(v))


@njit(cache=True, fastmath=True)
def reflect(direction, normal):
    """
    Отражение вектора direction относительно нормали: 2 * n * (d·n) - d.

    Возвращается отражение самого direction, а не -direction.
    """
    return subtract(scale(scale(normal, dot(direction, normal)), 2.0), direction)
