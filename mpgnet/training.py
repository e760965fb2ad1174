import math
from contextlib import nullcontext
from dataclasses import dataclass
from typing import NamedTuple, Optional

import torch
from torch import nn, optim
from tqdm import tqdm

from mpgnet.exceptions import TrainingDivergenceError
from mpgnet.utils.handling import (
    convert_Tensors_to_Dataset,
    support_for_progress_bars,
    my_warn,
)


class EpochMetrics(NamedTuple):
    epoch: int
    loss: float
    mse: float


@dataclass(frozen=True)
class TrainingConfig:
    optimizer: str = "Adam"  # ~~~ the name of a class in `torch.optim`
    lr: float = 0.001
    loss: str = "mse"
    batch_size: int = 64
    epochs: int = 100
    shuffle: bool = True  # ~~~ reshuffle the training data at the start of every epoch
    seed: Optional[int] = None  # ~~~ seeds only the per-epoch shuffling
    device: str = "cpu"
    progress_bar: bool = False

    #
    # ~~~ Build a config from a dictionary of hyperparameters with the capitalized keys used in the .json files
    @classmethod
    def from_hpars(cls, hpars):
        translation = {
            "OPTIMIZER": "optimizer",
            "LR": "lr",
            "BATCH_SIZE": "batch_size",
            "N_EPOCHS": "epochs",
            "SHUFFLE": "shuffle",
            "SEED": "seed",
            "DEVICE": "device",
        }
        return cls(**{translation[k]: v for k, v in hpars.items() if k in translation})


#
# ~~~ The only supported loss; the same quantity is reported as the "mse" metric
LOSS_FUNCTIONS = {"mse": nn.MSELoss}


def train(model, inputs, labels, config=None):
    """
    Fit `model` to the pairs (inputs, labels) and yield an `EpochMetrics` after every epoch.

    This is a generator: no training happens until it is iterated, and the
    caller may stop at any epoch boundary simply by no longer iterating. Both
    `loss` and `mse` are the per-sample average of the training loss over the
    epoch. Any error raised by torch is propagated as-is; a loss that is no
    longer finite raises `TrainingDivergenceError`.
    """
    config = TrainingConfig() if config is None else config
    if config.loss not in LOSS_FUNCTIONS:
        raise ValueError(
            f"Unsupported loss {config.loss!r}; expected one of {list(LOSS_FUNCTIONS)}"
        )
    #
    # ~~~ The optimizer, dataloader, and loss function
    Optimizer = getattr(
        optim, config.optimizer
    )  # ~~~ e.g., config.optimizer=="Adam" (str) -> Optimizer==optim.Adam
    optimizer = Optimizer(model.parameters(), lr=config.lr)
    loss_fn = LOSS_FUNCTIONS[config.loss]()
    generator = None
    if config.seed is not None:
        generator = torch.Generator()
        generator.manual_seed(config.seed)
    dataloader = torch.utils.data.DataLoader(
        convert_Tensors_to_Dataset(inputs, labels),
        batch_size=config.batch_size,
        shuffle=config.shuffle,
        generator=generator,
    )
    n_samples = len(dataloader.dataset)
    model.to(config.device)
    model.train()
    #
    # ~~~ Do the actual training loop
    pbar = (
        tqdm(desc="Training", total=config.epochs * len(dataloader), ascii=" >=")
        if config.progress_bar
        else None
    )
    try:
        for e in range(config.epochs):
            running_loss = 0.0
            #
            # ~~~ Route warnings around the progress bar for the duration of this epoch only
            with support_for_progress_bars() if pbar is not None else nullcontext():
                for X, y in dataloader:
                    X, y = X.to(config.device), y.to(config.device)
                    #
                    # ~~~ Compute the gradient of the loss function on the batch (X,y) and perform the gradient-based update
                    loss = loss_fn(model(X), y)
                    loss.backward()
                    optimizer.step()
                    optimizer.zero_grad()
                    running_loss += loss.item() * X.shape[0]
                    if pbar is not None:
                        _ = pbar.update()
            epoch_loss = running_loss / n_samples
            if not math.isfinite(epoch_loss):
                raise TrainingDivergenceError(epoch=e, loss=epoch_loss)
            if pbar is not None:
                pbar.set_postfix({"loss": f"{epoch_loss:<4.4f}"})
            yield EpochMetrics(epoch=e, loss=epoch_loss, mse=epoch_loss)
    finally:
        if pbar is not None:
            pbar.close()


#
# ~~~ Run `train` to completion, handing each epoch's metrics to `callback` (if any) as they arrive
def fit(model, inputs, labels, config=None, callback=None):
    history = []
    for metrics in train(model, inputs, labels, config):
        history.append(metrics)
        if callback is not None:
            callback(metrics)
    if len(history) == 0:
        my_warn("Training ran for zero epochs; the model is unchanged.")
    return history
