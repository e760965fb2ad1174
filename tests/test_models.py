import pytest
import torch
from torch import nn

from mpgnet.models import DEFAULT_ARCHITECTURE, create_model, load_architecture
from mpgnet.utils.handling import flatten_parameters


def test_topology():
    model = create_model(seed=0)
    linear_shapes = [
        (layer.in_features, layer.out_features, layer.bias is not None)
        for layer in model
        if isinstance(layer, nn.Linear)
    ]
    assert linear_shapes == [
        (1, 10, True),
        (10, 30, True),
        (30, 30, True),
        (30, 10, True),
        (10, 1, True),
    ]
    activations = [type(layer) for layer in model if not isinstance(layer, nn.Linear)]
    assert activations == [nn.Sigmoid] * 3
    #
    # ~~~ No activation directly after the first or the last linear layer
    assert isinstance(model[0], nn.Linear) and isinstance(model[1], nn.Linear)
    assert isinstance(model[-1], nn.Linear)


def test_parameter_count():
    assert flatten_parameters(create_model()).numel() == 1601


def test_forward_shape():
    model = create_model(seed=0)
    with torch.no_grad():
        assert model(torch.rand(7, 1)).shape == (7, 1)


def test_seeded_initialization_is_reproducible_and_independent():
    a, b, c = create_model(seed=1), create_model(seed=1), create_model(seed=2)
    assert torch.equal(flatten_parameters(a), flatten_parameters(b))
    assert not torch.equal(flatten_parameters(a), flatten_parameters(c))
    assert a[0].weight is not b[0].weight


def test_seeded_initialization_leaves_global_rng_alone():
    torch.manual_seed(11)
    expected = torch.rand(2)
    torch.manual_seed(11)
    create_model(seed=3)
    assert torch.equal(torch.rand(2), expected)


def test_load_architecture_by_name():
    module = load_architecture(DEFAULT_ARCHITECTURE)
    assert module.__name__ == f"mpgnet.models.{DEFAULT_ARCHITECTURE}"


def test_load_architecture_unknown_name():
    with pytest.raises(ModuleNotFoundError):
        load_architecture("no_such_architecture_anywhere")
