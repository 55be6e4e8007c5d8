# This file is part of pyLeafEB for calculating the leaf radiation budget
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
This package contains functions for estimating the longwave radiation exchanged by
a leaf and the photosynthetically active radiation it absorbs.

* :doc:`meteo_utils` for the estimation of meteorological variables.

PACKAGE CONTENTS
================
* :func:`net_longwave_radiation` Net longwave radiation between two objects.
* :func:`calc_ppfd_beer` Absorbed PPFD following the Beer-Lambert law.
* :class:`Beer` Beer-Lambert light interception model.
'''

import numpy as np

from . import meteo_utils as met
from .constants import DEFAULT_CONSTANTS


def net_longwave_radiation(T_1, T_2, emis_1, emis_2, F,
                           K_0=DEFAULT_CONSTANTS.K_0, sigma=DEFAULT_CONSTANTS.sigma):
    '''Net longwave radiation received by object 1 from object 2.

    Parameters
    ----------
    T_1 : float
        Temperature of object 1, e.g. the leaf (Celsius).
    T_2 : float
        Temperature of object 2, e.g. the air (Celsius).
    emis_1 : float
        Emissivity of object 1.
    emis_2 : float
        Emissivity of object 2.
    F : float
        View factor of object 1 to object 2. For a leaf and the sky this is the sky
        fraction (0-2): 2 if both faces only see the sky (e.g. in a controlled chamber),
        1 if the upper face sees the sky and the lower face sees objects at leaf
        temperature.
    K_0 : float
        Absolute zero (Celsius).
    sigma : float
        Stephan Boltzmann constant (W m-2 K-4).

    Returns
    -------
    R_ll : float
        Net longwave radiation (W m-2), positive when object 1 gains energy.

    References
    ----------
    Monteith, J. and Unsworth, M., 2013. Principles of environmental physics: plants,
    animals, and the atmosphere. Academic Press.
    '''

    T_1, T_2 = map(np.asarray, (T_1, T_2))
    M_1 = met.calc_stephan_boltzmann(T_1 - K_0, sigma=sigma)
    M_2 = met.calc_stephan_boltzmann(T_2 - K_0, sigma=sigma)
    R_ll = F * emis_1 * emis_2 * (M_2 - M_1)
    return np.asarray(R_ll)


def calc_ppfd_beer(Ri_PAR_f, LAI, k, J_to_umol=DEFAULT_CONSTANTS.J_to_umol):
    ''' Absorbed Photosynthetic Photon Flux Density following the Beer-Lambert law.

    Parameters
    ----------
    Ri_PAR_f : float
        Incident flux of atmospheric radiation in the PAR (W m-2).
    LAI : float
        Leaf area index above the leaf (m2 m-2).
    k : float
        Extinction coefficient.
    J_to_umol : float
        Conversion factor from W m-2 to micromol m-2 s-1.

    Returns
    -------
    PPFD : float
        Photosynthetic Photon Flux Density (micromol m-2 s-1).
    '''

    PPFD = Ri_PAR_f * np.exp(-k * LAI) * J_to_umol
    return np.asarray(PPFD)


class Beer():
    ''' Beer-Lambert light interception model.

    Parameters
    ----------
    k : float
        Extinction coefficient.
    '''

    def __init__(self, k):
        self.k = k

    def light_interception(self, status, atmosphere, constants=DEFAULT_CONSTANTS):
        ''' Sets status.PPFD from atmosphere.Ri_PAR_f and status.LAI.'''
        status.PPFD = np.float64(calc_ppfd_beer(atmosphere.Ri_PAR_f, status.LAI, self.k,
                                                J_to_umol=constants.J_to_umol))
