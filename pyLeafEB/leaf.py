# This file is part of pyLeafEB for describing a leaf and its state variables
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
Leaf description: geometry, models and the mutable status holding the state
variables updated by the gas exchange and energy balance models.

PACKAGE CONTENTS
================
* :class:`LeafGeometry` Immutable leaf dimensions.
* :class:`LeafStatus` Mutable leaf state variables.
* :class:`Leaf` Leaf geometry, models and status.
'''

from collections import namedtuple, OrderedDict

import numpy as np

LeafGeometry = namedtuple('LeafGeometry', ['d'])


class LeafStatus():
    ''' State variables of a leaf, updated in place by the models.

    A status belongs to a single leaf computation at a time. Variables not given
    are initialised to NaN.

    Attributes
    ----------
    T_l : float
        Leaf temperature (Celsius).
    Rn : float
        Net radiation (W m-2). Given as the isothermal net radiation, the longwave
        correction is added by the energy balance.
    R_ll : float
        Net longwave radiation (W m-2).
    sky_fraction : float
        Fraction of the sky viewed by the leaf (0-2).
    PPFD : float
        Absorbed Photosynthetic Photon Flux Density (micromol m-2 s-1).
    LAI : float
        Leaf area index above the leaf, only used for light interception (m2 m-2).
    C_s : float
        CO2 concentration at the leaf surface (micromol mol-1).
    D_l : float
        Leaf to air vapour pressure deficit (kPa).
    H : float
        Sensible heat flux (W m-2).
    LE : float
        Latent heat flux (W m-2).
    A : float
        Net CO2 assimilation (micromol m-2 s-1).
    G_s : float
        Stomatal conductance to CO2 (mol m-2 s-1).
    C_i : float
        Intercellular CO2 concentration (micromol mol-1).
    Gb_h : float
        Boundary layer conductance for heat (m s-1).
    n_iterations : int
        Number of iterations done by the energy balance.
    '''

    VARIABLES = ('T_l',
                 'Rn',
                 'R_ll',
                 'sky_fraction',
                 'PPFD',
                 'LAI',
                 'C_s',
                 'D_l',
                 'H',
                 'LE',
                 'A',
                 'G_s',
                 'C_i',
                 'Gb_h',
                 'n_iterations')

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self.VARIABLES)
        if unknown:
            raise TypeError('Unknown leaf status variables: %s' % ', '.join(sorted(unknown)))
        for var in self.VARIABLES:
            setattr(self, var, kwargs.get(var, np.nan))

    def as_dict(self):
        return OrderedDict((var, getattr(self, var)) for var in self.VARIABLES)

    def __repr__(self):
        values = ', '.join('%s=%s' % (var, value) for var, value in self.as_dict().items())
        return 'LeafStatus(%s)' % values


class Leaf():
    ''' A leaf with its geometry, models and status.

    Parameters
    ----------
    geometry : LeafGeometry
        Leaf dimensions.
    energy : Monteith
        Energy balance model.
    photosynthesis : AssimilationModel
        Photosynthesis model, bound to its stomatal conductance model.
    status : LeafStatus
        Leaf state variables.
    light_interception : Beer, optional
        Light interception model computing status.PPFD, if None PPFD is
        taken from the status.
    '''

    def __init__(self, geometry, energy, photosynthesis, status, light_interception=None):
        self.geometry = geometry
        self.energy = energy
        self.photosynthesis = photosynthesis
        self.status = status
        self.light_interception = light_interception
