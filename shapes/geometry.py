from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math
import numpy as np


@dataclass(frozen=True)
class Affine2D:
    """
    2D affine transform x -> A x + t
    """
    A: np.ndarray  # shape (2, 2)
    t: np.ndarray  # shape (2,)

    def __post_init__(self):
        if self.A.shape != (2, 2):
            raise ValueError("A must be 2x2")
        if self.t.shape != (2,):
            raise ValueError("t must be length-2")
        if abs(float(np.linalg.det(self.A))) < 1e-12:
            raise ValueError("A must be invertible")
        # Precompute inverse for efficient inverse application
        object.__setattr__(self, "_Ainv", np.linalg.inv(self.A))

    def apply(self, points_xy: np.ndarray) -> np.ndarray:
        """
        Map a single point of shape (2,) or a batch of shape (N, 2).
        """
        pts = np.asarray(points_xy, dtype=float)
        if pts.ndim == 1:
            return self.A @ pts + self.t
        return pts @ self.A.T + self.t

    def inverse_apply(self, points_xy: np.ndarray) -> np.ndarray:
        pts = np.asarray(points_xy, dtype=float)
        if pts.ndim == 1:
            return self._Ainv @ (pts - self.t)
        return (pts - self.t) @ self._Ainv.T

    def inverse(self) -> "Affine2D":
        return Affine2D(A=self._Ainv.copy(), t=-(self._Ainv @ self.t))

    # ---- Constructors and composition ----
    @staticmethod
    def from_translate(dx: float, dy: float) -> "Affine2D":
        return Affine2D(A=np.eye(2), t=np.array([dx, dy], dtype=float))

    @staticmethod
    def from_rotation(theta_radians: float) -> "Affine2D":
        c = math.cos(theta_radians)
        s = math.sin(theta_radians)
        return Affine2D(A=np.array([[c, -s], [s, c]], dtype=float), t=np.zeros(2))

    @staticmethod
    def from_shear_x(angle_radians: float) -> "Affine2D":
        """
        Horizontal shear: x' = x + tan(angle) * y
        """
        k = math.tan(angle_radians)
        return Affine2D(A=np.array([[1.0, k], [0.0, 1.0]], dtype=float), t=np.zeros(2))

    @staticmethod
    def from_shear_y(angle_radians: float) -> "Affine2D":
        """
        Vertical shear: y' = y + tan(angle) * x
        """
        k = math.tan(angle_radians)
        return Affine2D(A=np.array([[1.0, 0.0], [k, 1.0]], dtype=float), t=np.zeros(2))

    def then(self, after: "Affine2D") -> "Affine2D":
        """
        First apply self, then apply 'after'.
        y = after.apply(self.apply(x))
        """
        A_new = after.A @ self.A
        t_new = after.A @ self.t + after.t
        return Affine2D(A=A_new, t=t_new)

    def about(self, center_xy: Tuple[float, float]) -> "Affine2D":
        """
        Conjugate by a translation so the linear part pivots about center:
        T(center) . self . T(-center)
        """
        cx, cy = float(center_xy[0]), float(center_xy[1])
        return (
            Affine2D.from_translate(-cx, -cy)
            .then(self)
            .then(Affine2D.from_translate(cx, cy))
        )
