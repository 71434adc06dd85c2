"""2D transforms used for pointer hit-testing"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Affine2D:
    """
    2D affine matrix

        | a  c  e |
        | b  d  f |
        | 0  0  1 |

    x' = a*x + c*y + e
    y' = b*x + d*y + f
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def __matmul__(self, other: 'Affine2D') -> 'Affine2D':
        """self @ other applies other first, then self"""
        return Affine2D(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> 'Affine2D':
        det = self.determinant()
        if det == 0:
            raise ValueError("Affine2D is not invertible (zero scale)")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return Affine2D(
            a=a,
            b=b,
            c=c,
            d=d,
            e=-(a * self.e + c * self.f),
            f=-(b * self.e + d * self.f),
        )

    def transform_point(self, x: float, y: float) -> Tuple[float, float]:
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )


@dataclass(frozen=True)
class Transform2D:
    """Translation, rotation (radians, counter-clockwise) and scale, applied scale first"""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    @classmethod
    def from_translation(cls, x: float, y: float) -> 'Transform2D':
        return cls(x=x, y=y)

    def compute_matrix(self) -> Affine2D:
        cos = math.cos(self.rotation)
        sin = math.sin(self.rotation)
        return Affine2D(
            a=cos * self.scale_x,
            b=sin * self.scale_x,
            c=-sin * self.scale_y,
            d=cos * self.scale_y,
            e=self.x,
            f=self.y,
        )
