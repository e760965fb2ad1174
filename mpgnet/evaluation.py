from typing import NamedTuple

import torch

from mpgnet.data.preparation import denormalize


class Point(NamedTuple):
    x: float
    y: float


#
# ~~~ Run the model on an evenly spaced grid over the normalized input range, and express everything in the original units
def evaluate(model, original_records, bounds, n_points=100):
    """
    Returns `(original_points, predicted_points)`.

    `original_points` are the raw (horsepower, mpg) pairs of `original_records`.
    `predicted_points` are the model's predictions at `n_points` evenly spaced
    inputs covering [0,1], with both coordinates mapped back through `bounds`.
    The model is evaluated in eval mode and returned to its previous mode afterwards.
    """
    was_training = model.training
    model.eval()
    try:
        with torch.no_grad():
            parameter = next(model.parameters())
            grid = torch.linspace(
                0, 1, n_points, device=parameter.device, dtype=parameter.dtype
            ).reshape(-1, 1)
            predictions = model(grid)
            xs = denormalize(grid, bounds.input_min, bounds.input_max)
            ys = denormalize(predictions, bounds.label_min, bounds.label_max)
            xs, ys = xs.squeeze(-1).cpu().tolist(), ys.squeeze(-1).cpu().tolist()
    finally:
        model.train(was_training)
    predicted_points = [Point(x, y) for x, y in zip(xs, ys)]
    original_points = [Point(r.horsepower, r.mpg) for r in original_records]
    return original_points, predicted_points
