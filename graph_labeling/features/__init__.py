"""Feature dimensionality and joint feature vector construction."""

from graph_labeling.features.accumulators import (
    DenseFeatureAccumulator,
    DimensionMismatchError,
    FeatureAccumulator,
    SparseFeatureAccumulator,
    SparsePsi,
    accumulator_for,
)
from graph_labeling.features.dimensions import (
    FeatureDimensions,
    infer_dimensions,
    max_index_plus_one,
)

__all__ = [
    "DenseFeatureAccumulator",
    "DimensionMismatchError",
    "FeatureAccumulator",
    "FeatureDimensions",
    "SparseFeatureAccumulator",
    "SparsePsi",
    "accumulator_for",
    "infer_dimensions",
    "max_index_plus_one",
]
