import torch
from importlib import import_module

DEFAULT_ARCHITECTURE = "horsepower_NN_10_30_30_10"


#
# ~~~ Resolve an architecture by name: first `mpgnet.models.<name>`, then a top-level module `<name>` anywhere on the path
def load_architecture(name=DEFAULT_ARCHITECTURE):
    try:
        return import_module(f"mpgnet.models.{name}")
    except ModuleNotFoundError as e:
        if e.name != f"mpgnet.models.{name}":
            raise
        return import_module(name)


#
# ~~~ Build a freshly initialized network; a `seed` makes the initialization reproducible without disturbing the global RNG
def create_model(seed=None, architecture=DEFAULT_ARCHITECTURE):
    build = load_architecture(architecture).NN
    if seed is None:
        return build()
    with torch.random.fork_rng(devices=[]):
        torch.manual_seed(seed)
        return build()
