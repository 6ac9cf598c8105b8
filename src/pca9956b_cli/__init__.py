"""pca9956b-cli: Terminal control panel for PCA9956B 24-channel LED drivers."""

__version__ = "0.1.0"
