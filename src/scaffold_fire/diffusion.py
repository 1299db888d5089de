"""Anisotropic heat conduction over the lattice."""

import numpy as np

from .config import Material
from .parameters import ParameterSet

DOWNWARD_FACTOR = 0.1
LATERAL_FACTOR = 0.15


def diffusion_pass(
    temperature: np.ndarray,
    conductivity: float,
    upward_factor: float,
    downward_factor: float = DOWNWARD_FACTOR,
    lateral_factor: float = LATERAL_FACTOR,
) -> np.ndarray:
    """
    Run one conduction pass and return the new temperature field.

    Every cell sends ``(T_cell - T_neighbour) * conductivity * factor`` to
    each orthogonal neighbour, with the factor chosen by direction. The flux
    is taken from the cell and given to the neighbour in a separate delta
    buffer that is applied only after all cells were visited, so the result
    does not depend on visiting order. Both cells of an adjacent pair send
    flux to each other, so the pair exchanges heat with the sum of the two
    directions' factors. Edge cells simply lack the missing neighbour terms,
    so the total heat of the field is unchanged.

    Args:
        temperature: ``(height, width)`` field, row 0 at the top
        conductivity: Material conductivity
        upward_factor: Weight of flux toward the row above
        downward_factor: Weight of flux toward the row below
        lateral_factor: Weight of flux toward each side

    Returns:
        New ``(height, width)`` field
    """
    t = np.asarray(temperature, dtype=float)
    if t.ndim != 2:
        raise ValueError(f"Expected 2D array, got shape={t.shape}")
    delta = np.zeros_like(t)

    # toward the row above
    flux = (t[1:, :] - t[:-1, :]) * conductivity * upward_factor
    delta[1:, :] -= flux
    delta[:-1, :] += flux

    # toward the row below
    flux = (t[:-1, :] - t[1:, :]) * conductivity * downward_factor
    delta[:-1, :] -= flux
    delta[1:, :] += flux

    # toward the left
    flux = (t[:, 1:] - t[:, :-1]) * conductivity * lateral_factor
    delta[:, 1:] -= flux
    delta[:, :-1] += flux

    # toward the right
    flux = (t[:, :-1] - t[:, 1:]) * conductivity * lateral_factor
    delta[:, :-1] -= flux
    delta[:, 1:] += flux

    return t + delta


def diffuse(temperature: np.ndarray, material: Material, params: ParameterSet) -> np.ndarray:
    """Run as many passes as the material calls for (more for metal)."""
    conductivity = params.conductivity(material)
    t = np.asarray(temperature, dtype=float)
    for _ in range(params.diffusion_passes(material)):
        t = diffusion_pass(t, conductivity, params.vertical_spread_factor)
    return t
