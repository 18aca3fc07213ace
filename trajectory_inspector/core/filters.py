"""
Discrete convolution and fixed FIR kernels for trajectory time series

The derivative coefficients follow the central-difference tables of
T. Brox et al. (CFilter).
"""

import numpy as np
from .exceptions import InvalidInputError, UnsupportedWindowSizeError


# Central-difference coefficients, keyed by window size
DERIVATIVE_KERNELS = {
    2: (-1.0, 1.0),
    3: (-0.5, 0.0, 0.5),
    4: (1.0 / 24.0, -9.0 / 8.0, 9.0 / 8.0, -1.0 / 24.0),
    5: (1.0 / 12.0, -2.0 / 3.0, 0.0, 2.0 / 3.0, -1.0 / 12.0),
}


def kernel_halves(kernel_length):
    """Return (l_half, r_half): samples a kernel reaches on the left and on the right"""
    l_half = kernel_length // 2
    r_half = kernel_length - 1 - l_half
    return l_half, r_half


def convolve(signal, kernel, out=None):
    """
    Correlate a 1-D signal with a kernel.

    out[i] = sum_j signal[i + j - l_half] * kernel[j] for every i in
    [l_half, len(signal) - r_half). Samples outside that band are not written,
    so a freshly allocated output keeps zeros there. Use fill_margins() to
    choose a boundary policy.

    Parameters:
    -----------
    signal : array-like
        Input samples, not modified
    kernel : array-like
        Kernel coefficients, already in correlation orientation
    out : numpy.ndarray, optional
        Buffer of the signal's length to write into. It must not share
        memory with the signal.

    Returns:
    --------
    numpy.ndarray
        Output series, same length as the signal
    """
    if out is not None and np.shares_memory(out, signal):
        raise InvalidInputError("Output buffer must not alias the input signal")

    signal = np.asarray(signal, dtype=np.float64)
    kernel = np.asarray(kernel, dtype=np.float64)

    if signal.ndim != 1 or kernel.ndim != 1:
        raise InvalidInputError("Signal and kernel must be one-dimensional")
    if kernel.size == 0:
        raise InvalidInputError("Kernel must have at least one coefficient")
    if signal.size < kernel.size:
        raise InvalidInputError(
            f"Signal of length {signal.size} is shorter than kernel of length {kernel.size}"
        )

    if out is None:
        out = np.zeros(signal.size, dtype=np.float64)
    elif out.shape != signal.shape:
        raise InvalidInputError(
            f"Output buffer has shape {out.shape}, expected {signal.shape}"
        )
    elif not np.issubdtype(out.dtype, np.floating):
        raise InvalidInputError(f"Output buffer must be floating point, got {out.dtype}")

    l_half, r_half = kernel_halves(kernel.size)
    band = signal.size - kernel.size + 1  # number of writable samples

    # Accumulate tap by tap so every output sums its terms left to right
    total = np.zeros(band, dtype=np.float64)
    for j, coefficient in enumerate(kernel):
        total += signal[j:j + band] * coefficient

    out[l_half:signal.size - r_half] = total
    return out


def gaussian_kernel(window_size, sigma):
    """Normalized Gaussian smoothing kernel centred on window_size // 2"""
    if window_size < 1:
        raise InvalidInputError(f"Window size must be positive, got {window_size}")
    if not sigma > 0:
        raise InvalidInputError(f"Sigma must be positive, got {sigma}")

    centre = window_size // 2
    offsets = np.arange(window_size, dtype=np.float64) - centre
    kernel = np.exp(-offsets ** 2 / (2 * sigma ** 2))
    return kernel / kernel.sum()


def derivative_kernel(window_size):
    """Central-difference kernel for window sizes 2, 3, 4 and 5"""
    coefficients = DERIVATIVE_KERNELS.get(window_size)
    if coefficients is None:
        raise UnsupportedWindowSizeError(window_size, supported_derivative_sizes())
    return np.array(coefficients, dtype=np.float64)


def supported_derivative_sizes():
    """Window sizes with known derivative coefficients"""
    return sorted(DERIVATIVE_KERNELS)


def fill_margins(series, kernel_length, source=None):
    """
    Replace the samples a convolution could not reach.

    Parameters:
    -----------
    series : array-like
        Output of convolve() with the given kernel length
    kernel_length : int
        Length of the kernel that produced the series
    source : array-like, optional
        If given, margin samples are copied from it (e.g. the unsmoothed
        input). Otherwise they take the nearest computed sample.

    Returns:
    --------
    numpy.ndarray
        New series with the margins filled
    """
    filled = np.array(series, dtype=np.float64)
    l_half, r_half = kernel_halves(kernel_length)
    end = filled.size - r_half

    if end <= l_half:
        raise InvalidInputError(
            f"Series of length {filled.size} has no computed samples for kernel length {kernel_length}"
        )

    if source is not None:
        source = np.asarray(source, dtype=np.float64)
        if source.shape != filled.shape:
            raise InvalidInputError(
                f"Source has shape {source.shape}, expected {filled.shape}"
            )
        filled[:l_half] = source[:l_half]
        filled[end:] = source[end:]
    else:
        filled[:l_half] = filled[l_half]
        filled[end:] = filled[end - 1]

    return filled
