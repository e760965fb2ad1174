from torch import nn


#
# ~~~ 1 -> 10 (linear) -> 30 (sigmoid) -> 30 (sigmoid) -> 10 (sigmoid) -> 1 (linear)
def NN():
    return nn.Sequential(
        nn.Linear(1, 10, bias=True),  # ~~~ the "input layer" has no activation
        nn.Linear(10, 30),
        nn.Sigmoid(),
        nn.Linear(30, 30),
        nn.Sigmoid(),
        nn.Linear(30, 10),
        nn.Sigmoid(),
        nn.Linear(10, 1, bias=True),
    )
