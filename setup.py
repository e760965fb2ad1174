### ~~~
## ~~~ From https://github.com/maet3608/minimal-setup-py/blob/master/setup.py
### ~~~

from setuptools import setup, find_packages


#
# ~~ Load the a .txt file, into a list of strings (each line is a string in the list)
def txt_to_list(filepath):
    with open(filepath, "r") as f:
        return [line.strip() for line in f if line.strip()]


#
# ~~~ Install
setup(
    name="mpgnet",
    version="1.0.0",
    description="Fit a small feed-forward network predicting fuel economy from horsepower, and plot the fit",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"mpgnet.experiments": ["*.json"]},
    install_requires=txt_to_list(
        "requirements.txt"
    ),  # ~~~ assuming, of course, that "requirements.txt" is in the same directory as this file
    extras_require={"test": ["pytest"]},
)
