import pytest
import torch
from torch import nn

from mpgnet.metrics import absolute_errors, mae, max_norm, rmse


#
# ~~~ Predicts exactly 0 everywhere
def zero_model():
    model = nn.Linear(1, 1)
    with torch.no_grad():
        model.weight.zero_()
        model.bias.zero_()
    return model


X = torch.zeros(4, 1)
Y = torch.tensor([[3.0], [-4.0], [0.0], [1.0]])


def test_absolute_errors():
    assert torch.equal(absolute_errors(zero_model(), X, Y), Y.abs())


def test_rmse():
    assert rmse(zero_model(), X, Y) == pytest.approx((26 / 4) ** 0.5)


def test_mae():
    assert mae(zero_model(), X, Y) == pytest.approx(2.0)


def test_max_norm():
    assert max_norm(zero_model(), X, Y) == pytest.approx(4.0)


def test_shape_mismatch():
    with pytest.raises(AssertionError):
        rmse(zero_model(), X, Y.squeeze(-1))
