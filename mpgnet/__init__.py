from warnings import warn as my_warn
from importlib.metadata import version as importlib_version, PackageNotFoundError

#
# ~~~ Fetch local package version
try:
    __version__ = importlib_version("mpgnet")
except PackageNotFoundError as e:
    my_warn(f"Could not determine mpgnet version via importlib: {e}")
    __version__ = "unknown"

#
# ~~~ The pipeline, in the order it runs
from mpgnet.exceptions import *
from mpgnet.data.cars import Record, load, clean, fetch_raw_cars
from mpgnet.data.preparation import (
    NormalizationBounds,
    NormalizedDataset,
    prepare,
    normalize,
    denormalize,
)
from mpgnet.models import create_model
from mpgnet.training import EpochMetrics, TrainingConfig, train, fit
from mpgnet.evaluation import Point, evaluate
