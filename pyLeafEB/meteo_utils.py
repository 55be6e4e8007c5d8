# This file is part of pyLeafEB for calculating the meteorolgical variables
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

'''
DESCRIPTION
===========
This package contains functions for estimating the meteorological variables needed
by the leaf energy balance, and the immutable :class:`Atmosphere` record that holds
them for one evaluation of the leaf model.

Leaf models work with temperatures in Celsius and pressures in kPa, whereas the
functions below keep the Kelvin and mb convention of the resistance energy balance
models. :meth:`Atmosphere.from_meteo` does the conversion.

PACKAGE CONTENTS
================
* :func:`calc_lambda` Latent heat of vaporization.
* :func:`calc_psicr` Psicrometric constant.
* :func:`calc_rho` Density of air.
* :func:`calc_stephan_boltzmann` Stephan-Boltzmann law for blackbody radiation emission.
* :func:`calc_vapor_pressure` Saturation water vapour pressure.
* :func:`calc_delta_vapor_pressure` Slope of saturation water vapour pressure.
* :func:`calc_emiss_atm` Atmospheric emissivity.
* :class:`Atmosphere` Meteorological conditions around the leaf.
'''

from collections import namedtuple
import logging

import numpy as np

from .constants import DEFAULT_CONSTANTS

logger = logging.getLogger(__name__)

# ==============================================================================
# List of constants used in Meteorological computations
# ==============================================================================
# Stephan Boltzmann constant (W m-2 K-4)
sb = 5.670373e-8
# ratio of the molecular weight of water vapor to dry air
epsilon = 0.622
# gas constant for dry air, J/(kg*degK)
R_d = 287.04


def calc_lambda(T_A_K, lambda_0=2.501):
    '''Calculates the latent heat of vaporization.

    Parameters
    ----------
    T_A_K : float
        Air temperature (Kelvin).
    lambda_0 : float, optional
        Latent heat of vaporization at 0 Celsius (MJ kg-1).

    Returns
    -------
    Lambda : float
        Latent heat of vaporisation (J kg-1).

    References
    ----------
    based on Eq. 3-1 Allen FAO98 '''

    Lambda = 1e6 * (lambda_0 - (2.361e-3 * (T_A_K - 273.15)))
    return np.asarray(Lambda)


def calc_psicr(c_p, p, Lambda, epsilon=epsilon):
    ''' Calculates the psicrometric constant.

    Parameters
    ----------
    c_p : float
        heat capacity of (moist) air at constant pressure (J kg-1 K-1).
    p : float
        atmopheric pressure, the constant takes the same units (mb or kPa).
    Lambda : float
        latent heat of vaporzation (J kg-1).
    epsilon : float, optional
        ratio of the molecular weight of water vapor to dry air.

    Returns
    -------
    psicr : float
        Psicrometric constant (p units C-1).'''

    psicr = c_p * p / (epsilon * Lambda)
    return np.asarray(psicr)


def calc_rho(p, ea, T_A_K, R_d=R_d, epsilon=epsilon):
    '''Calculates the density of air.

    Parameters
    ----------
    p : float
        total air pressure (dry air + water vapour) (mb).
    ea : float
        water vapor pressure at reference height above canopy (mb).
    T_A_K : float
        air temperature at reference height (Kelvin).
    R_d : float, optional
        gas constant for dry air (J kg-1 K-1).
    epsilon : float, optional
        ratio of the molecular weight of water vapor to dry air.

    Returns
    -------
    rho : float
        density of air (kg m-3).

    References
    ----------
    based on equation (2.6) from Brutsaert (2005): Hydrology - An Introduction (pp 25).'''

    # p is multiplied by 100 to convert from mb to Pascals
    rho = ((p * 100.0) / (R_d * T_A_K)) * (1.0 - (1.0 - epsilon) * ea / p)
    return np.asarray(rho)


def calc_stephan_boltzmann(T_K, sigma=sb):
    '''Calculates the total energy radiated by a blackbody.

    Parameters
    ----------
    T_K : float
        body temperature (Kelvin)
    sigma : float, optional
        Stephan-Boltzmann constant (W m-2 K-4)

    Returns
    -------
    M : float
        Emitted radiance (W m-2)'''

    M = sigma * T_K**4
    return np.asarray(M)


def calc_vapor_pressure(T_K):
    """Calculate the saturation water vapour pressure.

    Parameters
    ----------
    T_K : float
        temperature (K).

    Returns
    -------
    ea : float
        saturation water vapour pressure (mb).
    """

    T_C = T_K - 273.15
    ea = 6.112 * np.exp((17.67 * T_C) / (T_C + 243.5))
    return np.asarray(ea)


def calc_delta_vapor_pressure(T_K):
    """Calculate the slope of saturation water vapour pressure.

    Parameters
    ----------
    T_K : float
        temperature (K).

    Returns
    -------
    s : float
        slope of the saturation water vapour pressure (kPa K-1)
    """

    T_C = T_K - 273.15
    s = 4098.0 * (0.6108 * np.exp(17.27 * T_C / (T_C + 237.3))) / ((T_C + 237.3)**2)
    return np.asarray(s)


def calc_emiss_atm(ea, t_a_k):
    '''Atmospheric emissivity

    Estimates the effective atmospheric emissivity for clear sky.

    Parameters
    ----------
    ea : float
        atmospheric vapour pressure (mb).
    t_a_k : float
        air temperature (Kelvin).

    Returns
    -------
    emiss_air : float
        effective atmospheric emissivity.

    References
    ----------
    .. [Brutsaert1975] Brutsaert, W. (1975) On a derivable formula for long-wave radiation
        from clear skies, Water Resour. Res., 11(5), 742-744,
        htpp://dx.doi.org/10.1029/WR011i005p00742.'''

    emiss_air = 1.24 * (ea / t_a_k)**(1. / 7.)  # Eq. 11 in [Brutsaert1975]_

    return np.asarray(emiss_air)


ATMOSPHERE_FIELDS = ('T_A',
                     'u',
                     'p',
                     'rh',
                     'ca',
                     'ea',
                     'es',
                     'vpd',
                     'emis',
                     'rho',
                     'psicr',
                     'lambda_',
                     'Ri_PAR_f')


class Atmosphere(namedtuple('Atmosphere', ATMOSPHERE_FIELDS)):
    ''' Meteorological conditions surrounding a leaf for one evaluation.

    Attributes
    ----------
    T_A : float
        Air temperature (Celsius).
    u : float
        Wind speed (m s-1).
    p : float
        Air pressure (kPa).
    rh : float
        Relative humidity (0-1).
    ca : float
        Air CO2 concentration (micromol mol-1).
    ea : float
        Water vapour pressure (kPa).
    es : float
        Saturation water vapour pressure (kPa).
    vpd : float
        Vapour pressure deficit (kPa).
    emis : float
        Clear sky atmospheric emissivity.
    rho : float
        Density of moist air (kg m-3).
    psicr : float
        Psicrometric constant (kPa K-1).
    lambda_ : float
        Latent heat of vaporisation (J kg-1).
    Ri_PAR_f : float
        Incident flux of atmospheric radiation in the PAR (W m-2).
    '''

    __slots__ = ()

    @classmethod
    def from_meteo(cls, T_A, u, p, rh, ca=400., Ri_PAR_f=np.nan,
                   constants=DEFAULT_CONSTANTS):
        ''' Derives the full atmosphere record from the primary meteorological variables.

        Parameters
        ----------
        T_A : float
            Air temperature (Celsius).
        u : float
            Wind speed (m s-1).
        p : float
            Air pressure (kPa).
        rh : float
            Relative humidity (0-1).
        ca : float, optional
            Air CO2 concentration (micromol mol-1), default 400.
        Ri_PAR_f : float, optional
            Incident PAR flux (W m-2).
        constants : Constants, optional
            Physical constants, ``K_0``, ``c_p``, ``R_d``, ``epsilon`` and ``lambda_0``
            are used.

        Returns
        -------
        atmosphere : Atmosphere
        '''

        if p <= 0:
            raise ValueError('air pressure must be positive, got %s kPa' % p)
        if rh < 0 or rh > 1:
            logger.warning('Relative humidity %s is outside the 0-1 range', rh)

        T_A_K = T_A - constants.K_0
        p_mb = 10. * p
        # vapour pressures are computed in mb and stored in kPa
        es = calc_vapor_pressure(T_A_K)
        ea = rh * es
        rho = calc_rho(p_mb, ea, T_A_K, R_d=constants.R_d, epsilon=constants.epsilon)
        lambda_ = calc_lambda(T_A_K, lambda_0=constants.lambda_0)
        psicr = calc_psicr(constants.c_p, p, lambda_, epsilon=constants.epsilon)
        emis = calc_emiss_atm(ea, T_A_K)

        return cls(T_A=float(T_A),
                   u=float(u),
                   p=float(p),
                   rh=float(rh),
                   ca=float(ca),
                   ea=float(ea / 10.),
                   es=float(es / 10.),
                   vpd=float((es - ea) / 10.),
                   emis=float(emis),
                   rho=float(rho),
                   psicr=float(psicr),
                   lambda_=float(lambda_),
                   Ri_PAR_f=float(Ri_PAR_f))
