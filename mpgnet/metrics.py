import torch


#
# ~~~ Absolute residuals |model(x)-y| of a deterministic model, computed without tracking gradients
def absolute_errors(model, x, y):
    with torch.no_grad():
        prediction = model(x)
        assert (
            prediction.shape == y.shape
        ), f"Predictions of shape {tuple(prediction.shape)} do not match targets of shape {tuple(y.shape)}"
        return (prediction - y).abs()


def rmse(model, x, y):
    return absolute_errors(model, x, y).square().mean().sqrt().item()


def mae(model, x, y):
    return absolute_errors(model, x, y).mean().item()


#
# ~~~ The worst single residual
def max_norm(model, x, y):
    return absolute_errors(model, x, y).max().item()
