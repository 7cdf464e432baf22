from setuptools import setup, find_packages

with open("requirements.txt") as f:
    required = f.read().splitlines()

setup(
    name="mage",
    version="0.0.1",
    packages=find_packages("src"),
    package_dir={"": "src"},
    install_requires=required,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.11",
    entry_points={"console_scripts": ["mage = mage.cli:main"]},
    description="Symlink dotfiles from a local directory or GitHub repository",
)
