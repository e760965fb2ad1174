### ~~~
## ~~~ Import block
### ~~~

#
# ~~~ Standard packages
import os
import torch
from time import time
from dataclasses import replace
from matplotlib import pyplot as plt

#
# ~~~ Other parts of this package
from mpgnet.data.cars import load, DATA_URL
from mpgnet.data.preparation import prepare
from mpgnet.models import create_model, DEFAULT_ARCHITECTURE
from mpgnet.training import TrainingConfig, fit
from mpgnet.evaluation import evaluate, Point
from mpgnet.metrics import rmse, mae, max_norm
from mpgnet.utils.plotting import (
    scatterplot,
    show_model_summary,
    plot_training_history,
)
from mpgnet.utils.handling import (
    json_to_dict,
    dict_to_json,
    get_key_or_default,
    generate_json_filename,
    process_for_saving,
    print_dict,
    my_warn,
    parse,
)

#
# ~~~ Used for any hyperparameter missing from the .json file
DEFAULT_HPARS = {
    "DATA_URL": DATA_URL,
    "TIMEOUT": 30.0,
    "SEED": 2024,
    "DTYPE": "float",
    "DEVICE": "cpu",
    "ARCHITECTURE": DEFAULT_ARCHITECTURE,
    "OPTIMIZER": "Adam",
    "LR": 0.001,
    "BATCH_SIZE": 64,
    "N_EPOCHS": 100,
    "SHUFFLE": True,
    "N_PROBE_POINTS": 100,
    "SHOW_PLOT": True,
    "SHOW_DIAGNOSTICS": True,
}

#
# ~~~ The json shipped with the package, which `--json demo_nn` resolves to
DEMO_JSON = os.path.join(os.path.dirname(__file__), "demo_nn.json")


#
# ~~~ Fill in any missing hyperparameters (with a warning) and flag any that will be ignored
def resolve_hpars(hpars):
    for key in hpars:
        if key not in DEFAULT_HPARS:
            my_warn(f'Unrecognized hyper-parameter "{key}" will be ignored.')
    return {
        key: get_key_or_default(hpars, key, default)
        for key, default in DEFAULT_HPARS.items()
    }


def run(hpars, session=None):
    """
    The whole pipeline: fetch and clean the data, normalize it, build and train
    the network, then evaluate it on a grid. Returns the hyperparameters
    augmented with results, along with the trained model.
    """
    hpars = resolve_hpars(hpars)
    #
    # ~~~ Handle the values not writeable in .json format
    DTYPE = getattr(
        torch, hpars["DTYPE"]
    )  # ~~~ e.g., DTYPE=="float" (str) -> DTYPE==torch.float (torch.dtype)
    starting_time = time()
    #
    # ~~~ Load the data and look at it
    records = load(url=hpars["DATA_URL"], timeout=hpars["TIMEOUT"], session=session)
    if hpars["SHOW_PLOT"]:
        scatterplot(
            "Horsepower v MPG",
            {"original": [Point(r.horsepower, r.mpg) for r in records]},
        )
    #
    # ~~~ Build the model
    NN = create_model(seed=hpars["SEED"], architecture=hpars["ARCHITECTURE"]).to(
        device=hpars["DEVICE"], dtype=DTYPE
    )
    if hpars["SHOW_DIAGNOSTICS"]:
        show_model_summary(NN)
    #
    # ~~~ Normalize and train
    dataset = prepare(records, seed=hpars["SEED"], dtype=DTYPE)
    inputs = dataset.inputs.to(hpars["DEVICE"])
    labels = dataset.labels.to(hpars["DEVICE"])
    config = replace(
        TrainingConfig.from_hpars(hpars), progress_bar=hpars["SHOW_DIAGNOSTICS"]
    )
    history = fit(NN, inputs, labels, config)
    #
    # ~~~ Compute the desired metrics (on the normalized scale)
    hpars["compute_time"] = time() - starting_time
    hpars["n_records"] = len(records)
    hpars["bounds"] = dataset.bounds._asdict()
    hpars["train_loss_curve"] = [h.loss for h in history]
    hpars["METRIC_rmse"] = rmse(NN, inputs, labels)
    hpars["METRIC_mae"] = mae(NN, inputs, labels)
    hpars["METRIC_max_norm"] = max_norm(NN, inputs, labels)
    #
    # ~~~ Compare predictions with the data
    original, predicted = evaluate(
        NN, records, dataset.bounds, n_points=hpars["N_PROBE_POINTS"]
    )
    if hpars["SHOW_PLOT"]:
        plot_training_history(history)
        scatterplot(
            "Model Predictions vs Original Data",
            {"original": original, "predicted": predicted},
        )
    return hpars, NN


def main(args=None, session=None):
    #
    # ~~~ Use argparse to extract the file name `my_hyperparmeters.json` from `python train_nn.py --json my_hyperparmeters.json`
    input_json_filename, model_save_dir, overwrite_json = parse(
        args, hint="try `python -m mpgnet.experiments.train_nn --json demo_nn`"
    )
    if input_json_filename == "demo_nn.json" and not os.path.exists(
        input_json_filename
    ):
        input_json_filename = DEMO_JSON
    hpars, NN = run(json_to_dict(input_json_filename), session=session)
    #
    # ~~~ Save the results
    if os.path.basename(input_json_filename).startswith("demo"):
        my_warn(
            f'Results are not saved when the hyperparameter json filename starts with "demo" (in this case `{input_json_filename}`)'
        )
    else:
        output_json_filename = (
            input_json_filename
            if overwrite_json
            else generate_json_filename(
                directory=os.path.dirname(input_json_filename),
                verbose=hpars["SHOW_DIAGNOSTICS"],
            )
        )
        if model_save_dir is not None:
            os.makedirs(model_save_dir, exist_ok=True)
            state_dict_path = process_for_saving(
                os.path.join(
                    model_save_dir,
                    os.path.splitext(os.path.basename(output_json_filename))[0]
                    + ".pth",
                )
            )
            hpars["STATE_DICT_PATH"] = state_dict_path
            torch.save(NN.state_dict(), state_dict_path)
        hpars["filename"] = output_json_filename
        dict_to_json(
            hpars,
            output_json_filename,
            override=overwrite_json,
            verbose=hpars["SHOW_DIAGNOSTICS"],
        )
    #
    # ~~~ Display the results
    if hpars["SHOW_DIAGNOSTICS"]:
        print_dict(hpars)
    plt.close("all")
    return hpars, NN


if __name__ == "__main__":
    main()
