# This file is part of pyLeafEB for estimating the stomatal conductance
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
Stomatal conductance models for CO2 (mol m-2 s-1). All the models take the form

``G_s = max(gs_min, g0 + gs_closure * A)``

where each model only has to implement the stomatal closure term ``gs_closure``.

PACKAGE CONTENTS
================
* :class:`Medlyn` [Medlyn2011]_ optimal stomatal conductance.
* :class:`ConstantGs` Constant stomatal conductance.
'''

import numpy as np

# Default residual conductance (mol m-2 s-1)
GS_MIN = 0.001


class StomatalConductanceModel():
    ''' Base class of the stomatal conductance models.

    Parameters
    ----------
    g0 : float
        Residual conductance at A = 0 (mol m-2 s-1), can be negative.
    gs_min : float
        Minimum stomatal conductance allowed (mol m-2 s-1).
    '''

    def __init__(self, g0, gs_min=GS_MIN):
        self.g0 = g0
        self.gs_min = gs_min

    def gs_closure(self, status, atmosphere):
        raise NotImplementedError

    def gs(self, status, gs_closure):
        ''' Stomatal conductance to CO2 (mol m-2 s-1) for the assimilation in status.'''
        return np.maximum(self.gs_min, self.g0 + gs_closure * status.A)


class Medlyn(StomatalConductanceModel):
    ''' Optimal stomatal conductance model of [Medlyn2011]_.

    Parameters
    ----------
    g0 : float
        Residual conductance (mol m-2 s-1).
    g1 : float
        Slope parameter (kPa**0.5), inversely proportional to the square root of
        the carbon cost per unit water used by the plant.
    gs_min : float
        Minimum stomatal conductance allowed (mol m-2 s-1). Kept apart from g0
        because a fitted g0 is sometimes negative.

    References
    ----------
    .. [Medlyn2011] Medlyn, B.E., Duursma, R.A., Eamus, D., Ellsworth, D.S.,
        Prentice, I.C., Barton, C.V.M., Crous, K.Y., De Angelis, P., Freeman, M.
        and Wingate, L., 2011. Reconciling the optimal and empirical approaches to
        modelling stomatal conductance. Global Change Biology, 17(6), 2134-2144.
        https://doi.org/10.1111/j.1365-2486.2010.02375.x
    '''

    def __init__(self, g0, g1, gs_min=GS_MIN):
        super().__init__(g0, gs_min=gs_min)
        self.g1 = g1

    def gs_closure(self, status, atmosphere):
        # Eq. 11 in [Medlyn2011]_, with the leaf to air vapour pressure deficit in kPa
        return np.asarray((1. + self.g1 / np.sqrt(status.D_l)) / status.C_s)


class ConstantGs(StomatalConductanceModel):
    ''' Stomatal conductance forced to a constant value.

    Parameters
    ----------
    G_s : float
        Stomatal conductance to CO2 (mol m-2 s-1).
    gs_min : float
        Minimum stomatal conductance allowed (mol m-2 s-1).
    '''

    def __init__(self, G_s, gs_min=GS_MIN):
        super().__init__(G_s, gs_min=gs_min)
        self.G_s = G_s

    def gs_closure(self, status, atmosphere):
        return 0.
