import pandas as pd
import torch
from matplotlib import pyplot as plt

from mpgnet.utils.handling import flatten_parameters, my_warn


### ~~~
## ~~~ Plotting routines
### ~~~

DEFAULT_COLORS = ("green", "blue", "hotpink", "orange", "midnightblue", "red")


#
# ~~~ Compute [min-c,max+c] where c>0 is a buffer (a zero-width range is padded by a fixed amount instead)
def buffer(vector, multiplier=0.05, pad_if_constant=1.0):
    a = min(vector)
    b = max(vector)
    extra = (b - a) * multiplier if b > a else pad_if_constant
    return [a - extra, b + extra]


#
# ~~~ Scatter one or more named series of `Point`s (anything with `.x` and `.y`) on a single set of axes
def scatterplot(
    title,
    series,  # ~~~ dict mapping a series name to a list of points
    x_label="Horsepower",
    y_label="MPG",
    colors=None,
    marker_size=None,
    figsize=(8, 4),
    fig="new",
    ax="new",
    show=True,
):
    if fig == "new" or ax == "new":
        fig, ax = plt.subplots(figsize=figsize)
    colors = DEFAULT_COLORS if colors is None else colors
    all_x, all_y = [], []
    for i, (name, points) in enumerate(series.items()):
        if len(points) == 0:
            my_warn(f'The series "{name}" is empty; nothing to plot for it.')
            continue
        x = [p.x for p in points]
        y = [p.y for p in points]
        all_x += x
        all_y += y
        _ = ax.scatter(
            x,
            y,
            s=(10 if len(x) < 400 else 4) if marker_size is None else marker_size,
            color=colors[i % len(colors)],
            label=name,
        )
    #
    # ~~~ Finish up
    if len(all_x) > 0:
        _ = ax.set_xlim(buffer(all_x))
        _ = ax.set_ylim(buffer(all_y, multiplier=0.1))
    _ = ax.set_xlabel(x_label)
    _ = ax.set_ylabel(y_label)
    _ = ax.set_title(title)
    if len(series) > 1:
        _ = ax.legend()
    _ = ax.grid()
    _ = fig.tight_layout()
    if show:
        plt.show()
    return fig, ax


#
# ~~~ Tabulate the layers of a sequential model: name, output shape, and number of parameters
def model_summary(model, input_features=1):
    rows = []
    with torch.no_grad():
        parameter = next(model.parameters())
        x = torch.zeros(
            1, input_features, device=parameter.device, dtype=parameter.dtype
        )
        for i, layer in enumerate(model):
            x = layer(x)
            rows.append(
                {
                    "layer": f"{type(layer).__name__.lower()}_{i}",
                    "output_shape": "[batch," + ",".join(map(str, x.shape[1:])) + "]",
                    "n_parameters": sum(p.numel() for p in layer.parameters()),
                }
            )
    summary = pd.DataFrame(rows)
    assert summary.n_parameters.sum() == flatten_parameters(model).numel()
    return summary


def show_model_summary(model, title="Model Summary", input_features=1):
    summary = model_summary(model, input_features=input_features)
    print(f"\n    {title}\n")
    print(summary.to_string(index=False))
    print(f"\n    Total parameters: {summary.n_parameters.sum()}\n")
    return summary


#
# ~~~ Plot each requested metric of the per-epoch training history against the epoch number
def plot_training_history(
    history,  # ~~~ list of `EpochMetrics` (anything with `.epoch` and the requested metric attributes)
    metrics=("loss", "mse"),
    title="Training Performance",
    figsize=(8, 3),
    show=True,
):
    fig, axs = plt.subplots(1, len(metrics), figsize=figsize, squeeze=False)
    epochs = [h.epoch for h in history]
    for ax, metric in zip(axs[0], metrics):
        (_,) = ax.plot(epochs, [getattr(h, metric) for h in history], color="blue")
        _ = ax.set_xlabel("Epoch")
        _ = ax.set_ylabel(metric)
        _ = ax.grid()
    _ = fig.suptitle(title)
    _ = fig.tight_layout()
    if show:
        plt.show()
    return fig, axs
