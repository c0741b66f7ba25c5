"""
Common type definitions for the document scanner.

Pydantic models shared by the scanner and the capture session: a guard
for incoming raster images and an integer pixel coordinate.
"""

from typing import Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator


class ImageBuffer(BaseModel):
    """
    Input guard for raster images entering the scanner.

    Accepts uint8 arrays shaped (H, W), (H, W, 1), (H, W, 3) BGR or
    (H, W, 4) BGRA. Anything else (None, empty, float, odd channel counts)
    is rejected with a ValueError before any OpenCV call sees it.

    Example:
        >>> buffer = ImageBuffer(data=cv2.imread("receipt.jpg"))
        >>> buffer.width, buffer.height
        (640, 480)
    """

    data: np.ndarray = Field(..., description="Captured image, uint8")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data", mode="before")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if v.ndim not in (2, 3):
            raise ValueError(f"Expected a 2D or 3D image array, got shape {v.shape}")

        if v.ndim == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(f"Unsupported number of channels: {v.shape[2]}")

        if v.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {v.dtype}")

        return v

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    def __repr__(self) -> str:
        return f"ImageBuffer(shape={self.data.shape}, dtype={self.data.dtype})"


class Point(BaseModel):
    """
    Type-safe representation of a 2D point (x, y) in pixel units.

    Contour vertices traced by OpenCV are integral, so coordinates are
    stored as ints (floats are rounded).

    Example:
        >>> point = Point(x=100, y=200)
        >>> arr = point.to_numpy()  # array([100., 200.], dtype=float32)
        >>> point2 = Point.from_numpy(np.array([150, 250]))
    """

    x: int = Field(..., description="X-coordinate (horizontal)")
    y: int = Field(..., description="Y-coordinate (vertical)")

    model_config = {"frozen": True}

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_int(cls, v: Union[int, float]) -> int:
        """Convert coordinate to int, rounding if float."""
        if isinstance(v, (int, float, np.integer, np.floating)):
            return int(round(float(v)))
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from numpy array.

        Args:
            arr: Numpy array of shape (2,) or (1, 2) with [x, y] coordinates.
                 The (1, 2) form is what cv2.approxPolyDP yields per vertex.

        Raises:
            ValueError: If array does not hold exactly one (x, y) pair.
        """
        arr = np.asarray(arr).reshape(-1)
        if arr.shape != (2,):
            raise ValueError(f"Expected a single (x, y) pair, got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert Point to numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def to_tuple(self) -> Tuple[int, int]:
        """Convert Point to tuple (x, y), the form cv2 drawing calls accept."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """
        Calculate Euclidean distance to another point.

        Args:
            other: Target point.

        Returns:
            Euclidean distance as float.
        """
        dx = self.x - other.x
        dy = self.y - other.y
        return float(np.sqrt(dx * dx + dy * dy))

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"
