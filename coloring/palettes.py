from typing import Dict, List, Tuple

import numpy as np
from scipy.interpolate import interp1d

from coloring.gradient import LinearGradient

RGB = Tuple[int, int, int]


def apply_gamma_correction(palette: List[RGB], gamma: float = 0.8) -> List[RGB]:
    """
    Applies gamma correction to a palette to increase contrast.

    Parameters:
        palette (list of tuple): List of RGB tuples (0–255).
        gamma (float): Gamma value (<1 brightens, >1 darkens).

    Returns:
        list of tuple: Gamma-corrected palette.
    """
    arr = np.asarray(palette, dtype=np.float64) / 255.0
    corrected = (255.0 * np.power(arr, gamma)).astype(np.int32)
    return [tuple(int(v) for v in color) for color in corrected]


def create_smooth_gradient(palette: List[RGB], resolution: int = 64,
                           interpolation: str = 'cubic',
                           gamma: float = 1.0) -> LinearGradient:
    """
    Densifies a short list of anchor colors into a gradient with many stops.

    Parameters:
        palette (list of tuple): A list of RGB tuples (each value 0–255) defining the base colors.
        resolution (int): Number of stops in the output gradient.
        interpolation (str): Interpolation method ('linear', 'quadratic', 'cubic', etc.).
        gamma (float): Optional gamma applied to the densified stops (1.0 disables it).

    Returns:
        LinearGradient: A gradient whose stops follow the interpolated curve.
    """
    if len(palette) < 2:
        raise ValueError("Palette must contain at least two colors for interpolation.")
    # cubic needs four anchors
    if interpolation == 'cubic' and len(palette) < 4:
        interpolation = 'linear'

    anchors = np.array(palette, dtype=np.float64)
    indices = np.linspace(0, len(palette) - 1, num=len(palette))
    interp_func = interp1d(indices, anchors, kind=interpolation, axis=0)
    smooth_indices = np.linspace(0, len(palette) - 1, num=resolution)
    smooth = [tuple(map(int, np.clip(color, 0, 255))) for color in interp_func(smooth_indices)]
    if gamma != 1.0:
        smooth = apply_gamma_correction(smooth, gamma)
    return LinearGradient(smooth)


DEFAULT_PALETTE = "Default"

# Anchor colors for each preset
base_palettes: Dict[str, List[RGB]] = {
    "Default": [
        (0, 7, 100), (32, 107, 203), (237, 255, 255),
        (255, 170, 0), (0, 2, 0)],

    "Fire": [
        (0, 0, 0), (255, 0, 0), (255, 85, 0), (255, 170, 0),
        (255, 255, 0), (255, 255, 85), (255, 255, 170)],

    "Ocean": [
        (0, 0, 0), (0, 32, 64), (0, 64, 128), (0, 96, 192),
        (0, 128, 255), (64, 160, 255), (128, 192, 255)],

    "Classic": [
        (66, 30, 15), (25, 7, 26), (9, 1, 47), (4, 4, 73),
        (0, 7, 100), (12, 44, 138), (24, 82, 177), (57, 125, 209),
        (134, 181, 229), (211, 236, 248), (241, 233, 191), (248, 201, 95),
        (255, 170, 0), (204, 128, 0), (153, 87, 0), (106, 52, 3)],

    "Sunset": [
        (0, 0, 0), (44, 0, 44), (128, 0, 64),
        (255, 94, 77), (255, 195, 113), (255, 255, 204)],

    "Grayscale": [(32, 32, 32), (255, 255, 255)],
}

palettes: Dict[str, LinearGradient] = {
    "Default": LinearGradient(base_palettes["Default"]),
    "Fire": create_smooth_gradient(base_palettes["Fire"], gamma=0.8),
    "Ocean": create_smooth_gradient(base_palettes["Ocean"], gamma=0.8),
    "Classic": create_smooth_gradient(base_palettes["Classic"]),
    "Sunset": create_smooth_gradient(base_palettes["Sunset"], interpolation='quadratic'),
    "Grayscale": LinearGradient(base_palettes["Grayscale"]),
}


def get_gradient(name: str) -> LinearGradient:
    try:
        return palettes[name]
    except KeyError as e:
        raise KeyError(f"Unknown palette '{name}'; choose from {sorted(palettes)}") from e
