# This file is part of pyLeafEB for calculating the leaf energy balance
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
This module contains the Penman-Monteith based energy balance of a single leaf,
solved iteratively for the leaf temperature together with the leaf gas exchange.

The leaf temperature is first set to air temperature. At each iteration the
photosynthesis model updates the assimilation and stomatal conductance, then the
longwave correction is added to the net radiation, the boundary layer conductances are
recomputed with the current leaf temperature and the latent heat flux is obtained
with the apparent psicrometric constant. The new leaf temperature closes the energy
balance with the sensible heat flux. The loop stops when two successive leaf
temperatures differ by less than the tolerance, or after ``maxiter`` iterations.

* :doc:`meteo_utils` for the estimation of meteorological variables.
* :doc:`resistances` for the estimation of the boundary layer conductances.
* :doc:`net_radiation` for the estimation of the longwave radiation.
* :doc:`physiology` for the photosynthesis models.

PACKAGE CONTENTS
================
* :class:`Monteith` Energy balance parameters of a leaf.
* :func:`compute_energy_balance` Entry point, light interception then energy balance.
* :func:`leaf_energy_balance_monteith` Iterative leaf energy balance.

Ancillary functions
-------------------
* :func:`calc_psicr_star` Apparent psicrometric constant.
* :func:`calc_latent_heat` Latent heat flux.
* :func:`calc_sensible_heat` Sensible heat flux.
* :func:`calc_leaf_temperature` Leaf temperature closing the energy balance.

References
----------
.. [Monteith2013] Monteith, J. and Unsworth, M., 2013. Principles of environmental
    physics: plants, animals, and the atmosphere. Academic Press.
.. [Schymanski2017] Schymanski, S.J. and Or, D., 2017. Leaf-scale experiments reveal
    an important omission in the Penman-Monteith equation. Hydrology and Earth System
    Sciences, 21(2), 685-706. https://doi.org/10.5194/hess-21-685-2017
"""

from collections import namedtuple
import logging

import numpy as np

from . import meteo_utils as met
from . import net_radiation as rad
from . import resistances as res
from .constants import DEFAULT_CONSTANTS

logger = logging.getLogger(__name__)

# ==============================================================================
# Default energy balance parameters
# ==============================================================================
# faces exchanging sensible heat
A_SH = 2
# faces exchanging water vapour, 1 for hypostomatous leaves
A_SV = 1
# leaf emissivity
EMIS_LEAF = 0.955
# maximum number of iterations
ITERATIONS = 10
# tolerance on the leaf temperature (Celsius)
TOL = 0.01


def calc_psicr_star(psicr, a_sh, a_sv, Rb_v, Rs_v, Rb_h):
    '''Apparent psicrometric constant.

    Parameters
    ----------
    psicr : float
        Psicrometric constant (kPa K-1).
    a_sh : float
        Number of faces exchanging sensible heat.
    a_sv : float
        Number of faces exchanging water vapour.
    Rb_v : float
        Boundary layer resistance to water vapour (s m-1).
    Rs_v : float
        Stomatal resistance to water vapour (s m-1).
    Rb_h : float
        Boundary layer resistance to heat (s m-1).

    Returns
    -------
    psicr_star : float
        Apparent psicrometric constant (kPa K-1).

    References
    ----------
    Eq. 13.29 in [Monteith2013]_, with the face ratio of [Schymanski2017]_.
    '''

    psicr_star = psicr * a_sh / a_sv * (Rb_v + Rs_v) / Rb_h
    return np.asarray(psicr_star)


def calc_latent_heat(Rn, vpd, psicr_star, Rb_h, delta, rho, a_sh, c_p):
    '''Latent heat flux of a leaf with the Penman-Monteith equation.

    Parameters
    ----------
    Rn : float
        Net radiation (W m-2).
    vpd : float
        Air vapour pressure deficit (kPa).
    psicr_star : float
        Apparent psicrometric constant (kPa K-1).
    Rb_h : float
        Boundary layer resistance to heat (s m-1).
    delta : float
        Slope of the saturation vapour pressure at air temperature (kPa K-1).
    rho : float
        Density of air (kg m-3).
    a_sh : float
        Number of faces exchanging sensible heat.
    c_p : float
        Heat capacity of air at constant pressure (J kg-1 K-1).

    Returns
    -------
    LE : float
        Latent heat flux (W m-2).
    '''

    LE = (delta * Rn + rho * c_p * vpd * a_sh / Rb_h) / (delta + psicr_star)
    return np.asarray(LE)


def calc_sensible_heat(Rn, vpd, psicr_star, Rb_h, delta, rho, a_sh, c_p):
    '''Sensible heat flux of a leaf, the complement of :func:`calc_latent_heat`.

    Parameters are the same as in :func:`calc_latent_heat`.

    Returns
    -------
    H : float
        Sensible heat flux (W m-2).
    '''

    H = (psicr_star * Rn - rho * c_p * vpd * a_sh / Rb_h) / (delta + psicr_star)
    return np.asarray(H)


def calc_leaf_temperature(T_A, Rn, LE, rho, c_p, a_sh, Rb_h):
    '''Leaf temperature that releases as sensible heat the net radiation not used by
    the latent heat flux.

    Parameters
    ----------
    T_A : float
        Air temperature (Celsius).
    Rn : float
        Net radiation (W m-2).
    LE : float
        Latent heat flux (W m-2).
    rho : float
        Density of air (kg m-3).
    c_p : float
        Heat capacity of air at constant pressure (J kg-1 K-1).
    a_sh : float
        Number of faces exchanging sensible heat.
    Rb_h : float
        Boundary layer resistance to heat (s m-1).

    Returns
    -------
    T_l : float
        Leaf temperature (Celsius).
    '''

    T_l = T_A + (Rn - LE) / (rho * c_p * a_sh / Rb_h)
    return np.asarray(T_l)


def calc_leaf_vapour_pressure_deficit(ET, p, Rb_v, Rs_v, a_sh, a_sv):
    '''Leaf to air vapour pressure difference that sustains a transpiration rate.

    Parameters
    ----------
    ET : float
        Transpiration (kg m-2 s-1).
    p : float
        Air pressure (kPa).
    Rb_v : float
        Boundary layer resistance to water vapour (s m-1).
    Rs_v : float
        Stomatal resistance to water vapour (s m-1).
    a_sh : float
        Number of faces exchanging sensible heat.
    a_sv : float
        Number of faces exchanging water vapour.

    Returns
    -------
    D_l : float
        Leaf to air vapour pressure difference (kPa).
    '''

    D_l = ET * p / ((Rb_v + Rs_v) * a_sh / a_sv)
    return np.asarray(D_l)


def leaf_energy_balance_monteith(leaf, atmosphere, constants=DEFAULT_CONSTANTS):
    '''Leaf energy balance solved iteratively for the leaf temperature.

    The leaf status is updated in place: ``T_l``, ``Rn``, ``R_ll``, ``C_s``, ``D_l``,
    ``Gb_h``, ``LE``, ``H``, ``A``, ``G_s``, ``C_i`` and ``n_iterations``.

    Parameters
    ----------
    leaf : Leaf
        Leaf with a :class:`Monteith` energy model. ``leaf.status.Rn`` holds the
        isothermal net radiation, each iteration adds its longwave correction to it.
    atmosphere : Atmosphere
        Meteorological conditions around the leaf.
    constants : Constants
        Physical constants.

    Returns
    -------
    None

    Notes
    -----
    On convergence ``status.T_l`` keeps the temperature used to compute the last
    fluxes, not the last temperature predicted.
    Not converging after ``maxiter`` iterations is not an error. Zero conductances
    give infinite resistances and the fluxes become inf or NaN.
    '''

    energy = leaf.energy
    status = leaf.status
    d = leaf.geometry.d

    T_A = np.float64(atmosphere.T_A)
    rho = atmosphere.rho
    vpd = atmosphere.vpd
    c_p = constants.c_p
    a_sh, a_sv = energy.a_sh, energy.a_sv

    # First guess, surface conditions equal to the free air
    status.T_l = T_A
    status.C_s = np.float64(atmosphere.ca)
    status.D_l = np.float64(vpd)
    psicr_star = np.float64(0.)
    Rb_h = np.float64(0.)
    delta = np.float64(0.)

    iterations = 0
    converged = False
    with np.errstate(divide='ignore', invalid='ignore'):
        for iterations in range(1, energy.maxiter + 1):
            leaf.photosynthesis.assimilate(status, atmosphere, constants)

            # Stomatal resistance to water vapour (s m-1)
            G_s_ms = res.mol_to_ms(status.G_s, T_A, atmosphere.p, constants.R, constants.K_0)
            Rs_v = res.conductance_2_resistance(res.gsc_to_gsw(G_s_ms, constants.Gsc_to_Gsw))

            status.R_ll = np.float64(rad.net_longwave_radiation(status.T_l,
                                                                T_A,
                                                                energy.emis,
                                                                atmosphere.emis,
                                                                status.sky_fraction,
                                                                K_0=constants.K_0,
                                                                sigma=constants.sigma))
            status.Rn = np.float64(status.Rn + status.R_ll)

            # Boundary layer conductances and resistances
            status.Gb_h = np.float64(res.boundary_layer_conductance(T_A,
                                                                    status.T_l,
                                                                    atmosphere.u,
                                                                    d,
                                                                    D_h0=constants.D_h0))
            Rb_h = res.conductance_2_resistance(status.Gb_h)
            Rb_v = res.conductance_2_resistance(res.gbh_to_gbw(status.Gb_h,
                                                               constants.Gbh_to_Gbw))
            Gbc = res.ms_to_mol(status.Gb_h, T_A, atmosphere.p,
                                constants.R, constants.K_0) / constants.Gbc_to_Gbh

            status.C_s = np.float64(atmosphere.ca - status.A / Gbc)

            psicr_star = calc_psicr_star(atmosphere.psicr, a_sh, a_sv, Rb_v, Rs_v, Rb_h)
            delta = met.calc_delta_vapor_pressure(T_A - constants.K_0)

            status.LE = np.float64(calc_latent_heat(status.Rn, vpd, psicr_star, Rb_h,
                                                    delta, rho, a_sh, c_p))

            # Transpiration (kg m-2 s-1) and leaf surface vapour pressure difference
            ET = status.LE / atmosphere.lambda_
            D_l_surf = calc_leaf_vapour_pressure_deficit(ET, atmosphere.p, Rb_v, Rs_v,
                                                         a_sh, a_sv)

            T_l_new = np.float64(calc_leaf_temperature(T_A, status.Rn, status.LE, rho,
                                                       c_p, a_sh, Rb_h))

            logger.debug('Iteration %d: T_l=%s, T_l_new=%s, Rn=%s, LE=%s, A=%s, '
                         'G_s=%s, C_s=%s, D_l surface=%s',
                         iterations, status.T_l, T_l_new, status.Rn, status.LE,
                         status.A, status.G_s, status.C_s, D_l_surf)

            if np.abs(T_l_new - status.T_l) <= energy.tol:
                converged = True
                break

            status.T_l = T_l_new

        status.H = np.float64(calc_sensible_heat(status.Rn, vpd, psicr_star, Rb_h,
                                                 delta, rho, a_sh, c_p))

    status.n_iterations = iterations
    if not converged:
        logger.debug('Leaf energy balance did not converge after %d iterations, '
                     'T_l=%s', iterations, status.T_l)


class Monteith(namedtuple('Monteith', ('a_sh', 'a_sv', 'emis', 'maxiter', 'tol'))):
    ''' Energy balance parameters of a leaf for the Monteith and Unsworth model.

    Attributes
    ----------
    a_sh : int
        Number of faces exchanging sensible heat, 2 for a planar leaf.
    a_sv : int
        Number of faces exchanging water vapour, 1 for hypostomatous
        and 2 for amphistomatous leaves.
    emis : float
        Leaf emissivity.
    maxiter : int
        Maximum number of iterations.
    tol : float
        Tolerance on the leaf temperature between two iterations (Celsius).
    '''

    __slots__ = ()

    def __new__(cls, a_sh=A_SH, a_sv=A_SV, emis=EMIS_LEAF, maxiter=ITERATIONS, tol=TOL):
        return super().__new__(cls, a_sh, a_sv, emis, maxiter, tol)

    def solve(self, leaf, atmosphere, constants=DEFAULT_CONSTANTS):
        leaf_energy_balance_monteith(leaf, atmosphere, constants)


def compute_energy_balance(leaf, atmosphere, constants=None):
    '''Computes the light interception (if the leaf has a model for it) and the energy
    balance of a leaf, updating ``leaf.status`` in place.

    Parameters
    ----------
    leaf : Leaf
        Leaf to solve.
    atmosphere : Atmosphere
        Meteorological conditions around the leaf.
    constants : Constants, optional
        Physical constants, :data:`DEFAULT_CONSTANTS` if None.

    Returns
    -------
    None
    '''

    if constants is None:
        constants = DEFAULT_CONSTANTS
    if leaf.light_interception is not None:
        leaf.light_interception.light_interception(leaf.status, atmosphere, constants)
    leaf.energy.solve(leaf, atmosphere, constants)
