"""Cosine similarity between embedding vectors.

Embedding models commonly return float32 components. All accumulation here is
done in float64 so long vectors do not lose precision before the final division.
"""

from collections.abc import Sequence

import numpy as np

from .exceptions import VectorDimensionMismatchError, ZeroVectorError

Vector = Sequence[float] | np.ndarray


def cosine_similarity(vector_a: Vector, vector_b: Vector) -> float:
    """Compute the cosine similarity between two vectors.

    Args:
        vector_a: First embedding vector
        vector_b: Second embedding vector

    Returns:
        Cosine similarity in [-1.0, 1.0] (up to floating-point rounding)

    Raises:
        VectorDimensionMismatchError: If the vectors differ in length or are not 1-D
        ZeroVectorError: If either vector is empty or all of its components are zero
    """
    a = np.asarray(vector_a, dtype=np.float64)
    b = np.asarray(vector_b, dtype=np.float64)

    if a.ndim != 1 or b.ndim != 1 or a.shape != b.shape:
        raise VectorDimensionMismatchError(
            "Vectors A and B have different lengths.",
            details={"shape_a": list(a.shape), "shape_b": list(b.shape)},
        )

    if not a.any():
        raise ZeroVectorError("Vector A is zero.", details={"length": a.size})
    if not b.any():
        raise ZeroVectorError("Vector B is zero.", details={"length": b.size})

    # Cosine similarity is scale invariant; unit max-norm keeps squares finite and non-zero
    a = a / np.max(np.abs(a))
    b = b / np.max(np.abs(b))

    dot_product = float(np.dot(a, b))
    magnitude_a = float(np.dot(a, a))
    magnitude_b = float(np.dot(b, b))

    return float(dot_product / (np.sqrt(magnitude_a) * np.sqrt(magnitude_b)))
