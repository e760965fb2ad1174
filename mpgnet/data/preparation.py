import math
from typing import NamedTuple

import torch

from mpgnet.exceptions import EmptyDatasetError
from mpgnet.utils.handling import convert_Tensors_to_Dataset


class NormalizationBounds(NamedTuple):
    input_min: float
    input_max: float
    label_min: float
    label_max: float


class NormalizedDataset(NamedTuple):
    inputs: torch.Tensor  # ~~~ shape (n,1), values in [0,1], in training order
    labels: torch.Tensor  # ~~~ shape (n,1), values in [0,1], aligned with `inputs`
    bounds: NormalizationBounds

    def __len__(self):
        return self.inputs.shape[0]

    def to_torch_dataset(self):
        return convert_Tensors_to_Dataset(self.inputs, self.labels)


### ~~~
## ~~~ Min-max scaling
### ~~~


#
# ~~~ Map [lo,hi] onto [0,1]; if lo==hi then every value is mapped to exactly 0
def normalize(values, lo, hi):
    if hi == lo:
        return torch.zeros_like(values) if isinstance(values, torch.Tensor) else 0.0
    return (values - lo) / (hi - lo)


#
# ~~~ Map [0,1] back onto [lo,hi]; if lo==hi then every value is mapped back to lo (which, by the above, is exactly the original value)
def denormalize(values, lo, hi):
    return values * (hi - lo) + lo


def compute_bounds(inputs, labels):
    return NormalizationBounds(
        input_min=inputs.min().item(),
        input_max=inputs.max().item(),
        label_min=labels.min().item(),
        label_max=labels.max().item(),
    )


### ~~~
## ~~~ Records -> tensors
### ~~~


def prepare(records, seed=None, dtype=torch.float32):
    """
    Shuffle `records`, split them into aligned (n,1) tensors of inputs (horsepower)
    and labels (mpg), and min-max scale each tensor onto [0,1].

    The shuffle uses a private `torch.Generator` so that passing `seed` gives a
    reproducible order without touching the global RNG. `records` itself is not
    modified. Raises `EmptyDatasetError` if there are no records, and
    `ValueError` if any horsepower or mpg is NaN or infinite.
    """
    records = list(records)
    if len(records) == 0:
        raise EmptyDatasetError("Cannot prepare an empty collection of records")
    #
    # ~~~ Step 1: shuffle
    generator = torch.Generator()
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(seed)
    permutation = torch.randperm(len(records), generator=generator).tolist()
    shuffled = [records[i] for i in permutation]
    #
    # ~~~ Steps 2-4: tensors, bounds, and scaling (nothing here should be tracked by autograd)
    with torch.no_grad():
        inputs = torch.tensor(
            [r.horsepower for r in shuffled], dtype=dtype
        ).reshape(-1, 1)
        labels = torch.tensor([r.mpg for r in shuffled], dtype=dtype).reshape(-1, 1)
        bounds = compute_bounds(inputs, labels)
        if not all(math.isfinite(b) for b in bounds):
            raise ValueError(
                f"Records must hold finite numbers only, got bounds {tuple(bounds)}"
            )
        return NormalizedDataset(
            inputs=normalize(inputs, bounds.input_min, bounds.input_max),
            labels=normalize(labels, bounds.label_min, bounds.label_max),
            bounds=bounds,
        )
