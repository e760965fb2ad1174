import torch
import platform
import warnings
import os
import re
import json
import pytz
import argparse
from tqdm import tqdm
from datetime import datetime
from contextlib import contextmanager


### ~~~
## ~~~ Console output
### ~~~

#
# ~~~ Non-fatal problems are reported as warnings rather than exceptions
my_warn = warnings.warn


#
# ~~~ Make ANSI colour codes work on Windows consoles (https://stackoverflow.com/a/15170325/11595884)
if platform.system() == "Windows":
    os.system("color")


class bcolors:  # https://stackoverflow.com/a/287944/11595884
    OKBLUE = "\033[94m"
    WARNING = "\033[93m"
    ENDC = "\033[0m"


#
# ~~~ Within this context, warnings are printed through `tqdm.write` so that they don't mangle an active progress bar
@contextmanager
def support_for_progress_bars():
    original_showwarning = warnings.showwarning

    def showwarning(message, category, filename, lineno, file=None, line=None):
        tqdm.write(
            bcolors.WARNING
            + warnings.formatwarning(message, category, filename, lineno, line).rstrip()
            + bcolors.ENDC
        )

    warnings.showwarning = showwarning
    try:
        yield
    finally:
        warnings.showwarning = original_showwarning


#
# ~~~ Format a long list for printing
def format_value(value):
    if isinstance(value, list) and len(value) > 4:
        #
        # ~~~ Show only the first two and last two elements
        return [value[0], value[1], "...", value[-2], value[-1]]
    return value


#
# ~~~ Pretty print a dictionary; from https://www.geeksforgeeks.org/python-pretty-print-a-dictionary-with-dictionary-value/
print_dict = lambda dict: print(
    json.dumps({k: format_value(v) for k, v in dict.items()}, indent=4)
)


### ~~~
## ~~~ Hyperparameters (.json files) and the command line
### ~~~


#
# ~~~ A json string literal (escapes included), or a // comment running to the end of its line
JSON_STRING_OR_COMMENT = re.compile(r'"(?:\\.|[^"\\])*"|//[^\n]*')


#
# ~~~ Load a .json as a dictionary, allowing // comments anywhere outside of string literals
def json_to_dict(path_including_file_extension):
    with open(path_including_file_extension, "r") as fp:
        content = JSON_STRING_OR_COMMENT.sub(
            lambda match: "" if match.group().startswith("//") else match.group(),
            fp.read(),
        )
    return json.loads(content)


#
# ~~~ Save a dictionary as a .json; from https://stackoverflow.com/a/7100202/11595884
def dict_to_json(dict, path_including_file_extension, override=False, verbose=True):
    not_empty = os.path.exists(path_including_file_extension)
    if not_empty and not override:
        raise ValueError(
            "The specified path already exists. Operation halted. Specify `override=True` to override this halting."
        )
    with open(path_including_file_extension, "w") as fp:
        json.dump(dict, fp, indent=4)
    if verbose:
        if not_empty:
            my_warn(
                f"The path {path_including_file_extension} was not empty. It has been overwritten."
            )
        print(
            f"    Created {path_including_file_extension} at {os.path.abspath(path_including_file_extension)}\n"
        )


#
# ~~~ Try to get dict[key] but, if that doesn't work, then warn and use `default` instead
def get_key_or_default(dictionary, key, default):
    try:
        return dictionary[key]
    except KeyError:
        my_warn(
            f'Hyper-parameter "{key}" not specified. Using default value of {default}.'
        )
        return default


#
# ~~~ Use argparse to extract the file name `my_hyperparmeters.json` and such from `python train_nn.py --json my_hyperparmeters.json` (https://stackoverflow.com/a/67731094)
def parse(args=None, hint=None):
    parser = argparse.ArgumentParser(
        description="Train a network predicting mpg from horsepower"
    )
    parser.add_argument("--json", type=str, required=True)
    parser.add_argument("--model_save_dir", type=str)
    parser.add_argument("--overwrite_json", action=argparse.BooleanOptionalAction)
    try:
        args = parser.parse_args(args)
    except SystemExit:
        if hint is not None:
            print(f"\n\n    Hint: {hint}\n")
        raise
    input_json_filename = (
        args.json if args.json.endswith(".json") else args.json + ".json"
    )
    overwrite_json = bool(args.overwrite_json)
    return input_json_filename, args.model_save_dir, overwrite_json


### ~~~
## ~~~ File names
### ~~~


def get_file_extension(file_path):
    return os.path.splitext(file_path)[1]


def get_file_name(file_path):
    return os.path.basename(file_path)


#
# ~~~ Turn "name of file that already exists.txt" into "name of file that already exists (1).txt"
def modify_path(file_path_or_name, force=False):
    #
    # ~~~ If the path doesn't exist, then no modification is needed
    if (not os.path.exists(file_path_or_name)) and (not force):
        return file_path_or_name
    original_extension = get_file_extension(file_path_or_name)
    file_name_and_extension = get_file_name(file_path_or_name)
    name_only = file_name_and_extension[
        : len(file_name_and_extension) - len(original_extension)
    ]
    #
    # ~~~ If the file name is like "text (2)", turn that into "text (3)"
    start = name_only.rfind("(")
    end = name_only.rfind(")")
    modified_name = None
    if name_only.endswith(")") and start != -1:
        try:
            num = int(name_only[start + 1 : end])
            modified_name = name_only[: start + 1] + str(num + 1) + name_only[end:]
        except ValueError:
            pass
    #
    # ~~~ Otherwise, just append " (1)" to the file name
    if modified_name is None:
        modified_name = name_only + " (1)"
    return os.path.join(
        os.path.dirname(file_path_or_name), modified_name + original_extension
    )


#
# ~~~ Keep modifying the path until it no longer collides with an existing file
def process_for_saving(file_path_or_name):
    while os.path.exists(file_path_or_name):
        file_path_or_name = modify_path(file_path_or_name)
    return file_path_or_name


#
# ~~~ Generate a .json filename based on the current datetime
def generate_json_filename(directory="", verbose=True, timezone="US/Central"):
    time = datetime.now(pytz.timezone(timezone))
    file_name = time.strftime("%Y-%m-%d_%H-%M-%S")
    file_name = process_for_saving(os.path.join(directory, file_name + ".json"))
    if verbose:
        print(
            bcolors.OKBLUE
            + f"    Generating file name {file_name} at {time.strftime('%I:%M%p')} {time.tzname()}"
            + bcolors.ENDC
        )
    return file_name


### ~~~
## ~~~ Tensors
### ~~~

#
# ~~~ Flatten and concatenate all the parameters in a model
flatten_parameters = lambda model: torch.cat([p.view(-1) for p in model.parameters()])


#
# ~~~ Convert a pair of aligned tensors into a pytorch Dataset; from https://fmorenovr.medium.com/how-to-load-a-custom-dataset-in-pytorch-create-a-customdataloader-in-pytorch-8d3d63510c21
class convert_Tensors_to_Dataset(torch.utils.data.Dataset):
    def __init__(self, X_tensor, y_tensor, **kwargs):
        super().__init__(**kwargs)
        assert isinstance(X_tensor, torch.Tensor)
        assert isinstance(y_tensor, torch.Tensor)
        assert X_tensor.shape[0] == y_tensor.shape[0]
        self.X = X_tensor
        self.y = y_tensor

    def __getitem__(self, index):
        return self.X[index], self.y[index]

    def __len__(self):
        return self.y.shape[0]
