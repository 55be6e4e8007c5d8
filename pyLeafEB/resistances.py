# This file is part of pyLeafEB for estimating the resistances to heat and mass transport
# Copyright 2016 Hector Nieto and contributors listed in the README.md file.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
DESCRIPTION
===========
This module includes functions for calculating the leaf boundary layer conductances
to heat and the conversions between conductances and resistances for heat, water
vapour and CO2.

Resistances are always computed as the reciprocal of the conductances. A zero
conductance therefore gives an infinite resistance, and the infinities or NaNs
propagate to the fluxes computed from it.

PACKAGE CONTENTS
================
Boundary layer
--------------
* :func:`calc_grashof` Grashof number.
* :func:`gbh_free` Boundary layer conductance for heat under free convection.
* :func:`gbh_forced` Boundary layer conductance for heat under forced convection.
* :func:`boundary_layer_conductance` Total boundary layer conductance for heat.

Unit conversions
----------------
* :func:`conductance_2_resistance` Reciprocal of a conductance.
* :func:`gbh_to_gbw` Boundary layer conductance for heat to water vapour.
* :func:`gsc_to_gsw` Stomatal conductance for CO2 to water vapour.
* :func:`ms_to_mol` Conductance from m s-1 to mol m-2 s-1.
* :func:`mol_to_ms` Conductance from mol m-2 s-1 to m s-1.
"""

import numpy as np

from .constants import DEFAULT_CONSTANTS

# Coefficient of the Grashof number (Monteith and Unsworth, 2013)
GRASHOF_COEF = 1.6e8
# Coefficient of the forced convection conductance (Jones, 1992)
FORCED_COEF = 0.003


def calc_grashof(T_A, T_l, d):
    ''' Grashof number of a leaf warmer than the air.

    Parameters
    ----------
    T_A : float
        Air temperature (Celsius).
    T_l : float
        Leaf temperature (Celsius).
    d : float
        Minimal dimension of the leaf (m).

    Returns
    -------
    Gr : float
        Grashof number.
    '''

    Gr = GRASHOF_COEF * np.abs(T_l - T_A) * d**3
    return np.asarray(Gr)


def gbh_free(T_A, T_l, d, D_h0=DEFAULT_CONSTANTS.D_h0):
    ''' Leaf boundary layer conductance for heat under free convection.

    Parameters
    ----------
    T_A : float
        Air temperature (Celsius).
    T_l : float
        Leaf temperature (Celsius).
    d : float
        Minimal dimension of the leaf (m).
    D_h0 : float
        Molecular diffusivity for heat at 0 Celsius (m2 s-1).

    Returns
    -------
    G_bh : float
        Boundary layer conductance for heat (m s-1), 0 if the leaf is not warmer
        than the air.

    References
    ----------
    .. [Leuning1995] Leuning, R., Kelliher, F. M., De Pury, D. G. G., & Schulze, E. D.
        (1995). Leaf nitrogen, photosynthesis, conductance and transpiration: scaling
        from leaves to canopies. Plant, Cell & Environment, 18(10), 1183-1200.
        https://doi.org/10.1111/j.1365-3040.1995.tb00628.x
    '''

    T_A, T_l, d = map(np.asarray, (T_A, T_l, d))
    Gr = calc_grashof(T_A, T_l, d)
    # Molecular diffusivity for heat at air temperature
    D_h = D_h0 * (1. + 0.007 * T_A)
    G_bh = np.where(T_l > T_A, 0.5 * D_h * Gr**0.25 / d, 0.)  # Eq. E3 in [Leuning1995]_
    return np.asarray(G_bh)


def gbh_forced(u, d):
    ''' Leaf boundary layer conductance for heat under forced convection.

    Parameters
    ----------
    u : float
        Wind speed (m s-1).
    d : float
        Minimal dimension of the leaf (m).

    Returns
    -------
    G_bh : float
        Boundary layer conductance for heat (m s-1).
    '''

    u, d = map(np.asarray, (u, d))
    G_bh = FORCED_COEF * np.sqrt(u / d)
    return np.asarray(G_bh)


def boundary_layer_conductance(T_A, T_l, u, d, D_h0=DEFAULT_CONSTANTS.D_h0):
    ''' Total leaf boundary layer conductance for heat, free plus forced convection (m s-1).'''

    return np.asarray(gbh_free(T_A, T_l, d, D_h0) + gbh_forced(u, d))


def conductance_2_resistance(G):
    ''' Resistance (s m-1 or m2 s mol-1) from a conductance (m s-1 or mol m-2 s-1).'''

    return np.asarray(1. / np.asarray(G, dtype=float))


def gbh_to_gbw(G_bh, Gbh_to_Gbw=DEFAULT_CONSTANTS.Gbh_to_Gbw):
    ''' Boundary layer conductance for water vapour from the conductance for heat.'''

    return np.asarray(G_bh * Gbh_to_Gbw)


def gsc_to_gsw(G_sc, Gsc_to_Gsw=DEFAULT_CONSTANTS.Gsc_to_Gsw):
    ''' Stomatal conductance for water vapour from the conductance for CO2.'''

    return np.asarray(G_sc * Gsc_to_Gsw)


def ms_to_mol(G, T, p, R=DEFAULT_CONSTANTS.R, K_0=DEFAULT_CONSTANTS.K_0):
    '''Converts a conductance from m s-1 to mol m-2 s-1.

    Parameters
    ----------
    G : float
        Conductance (m s-1).
    T : float
        Air temperature (Celsius).
    p : float
        Atmospheric pressure (kPa).
    R : float
        Universal gas constant (J mol-1 K-1).
    K_0 : float
        Absolute zero (Celsius).

    Returns
    -------
    G_mol : float
        Conductance (mol m-2 s-1).
    '''

    G_mol = G * p * 1e3 / (R * (T - K_0))
    return np.asarray(G_mol)


def mol_to_ms(G, T, p, R=DEFAULT_CONSTANTS.R, K_0=DEFAULT_CONSTANTS.K_0):
    '''Converts a conductance from mol m-2 s-1 to m s-1.

    Parameters
    ----------
    G : float
        Conductance (mol m-2 s-1).
    T : float
        Air temperature (Celsius).
    p : float
        Atmospheric pressure (kPa).
    R : float
        Universal gas constant (J mol-1 K-1).
    K_0 : float
        Absolute zero (Celsius).

    Returns
    -------
    G_ms : float
        Conductance (m s-1).

    References
    ----------
    [Kimball2015] Kimball, B. A., White, J. W., Ottman, M. J., Wall, G. W., Bernacchi, C. J.,
        Morgan, J., & Smith, D. P. (2015). Predicting canopy temperatures and infrared heater energy
        requirements for warming field plots. Agronomy Journal, 107(1), 129-141
        http://dx.doi.org/10.2134/agronj14.0109.
    '''

    G_ms = G * R * (T - K_0) / (p * 1e3)
    return np.asarray(G_ms)
