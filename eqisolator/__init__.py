"""Four-band isolator equalizer: crossover filters, smoothed gain and bypass, saved state."""

__version__ = "1.0.0"
__all__ = ["filters", "params", "processor", "smoothing", "state"]