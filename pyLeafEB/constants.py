# This file is part of pyLeafEB for holding the physical constants of the leaf models
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
Read-only bundle of physical constants shared by the leaf gas exchange and energy
balance routines. The bundle is a named tuple so it can be shared between leaves and
never modified by the models.

* K_0 : absolute zero (Celsius), temperatures in K are ``T - K_0``.
* R : universal gas constant (J mol-1 K-1).
* R_d : gas constant of dry air (J kg-1 K-1).
* D_h0 : molecular diffusivity for heat at 0 Celsius (m2 s-1).
* c_p : heat capacity of air at constant pressure (J kg-1 K-1).
* epsilon : ratio of the molecular weight of water vapor to dry air.
* lambda_0 : latent heat of vaporization at 0 Celsius (MJ kg-1).
* sigma : Stephan-Boltzmann constant (W m-2 K-4).
* Gbh_to_Gbw : boundary layer conductance ratio, water vapour to heat.
* Gsc_to_Gsw : stomatal conductance ratio, water vapour to CO2.
* Gbc_to_Gbh : boundary layer conductance ratio, heat to CO2.
* J_to_umol : conversion from W m-2 (PAR) to micromol m-2 s-1.
'''

from collections import namedtuple

CONSTANT_FIELDS = ('K_0',
                   'R',
                   'R_d',
                   'D_h0',
                   'c_p',
                   'epsilon',
                   'lambda_0',
                   'sigma',
                   'Gbh_to_Gbw',
                   'Gsc_to_Gsw',
                   'Gbc_to_Gbh',
                   'J_to_umol')

CONSTANT_DEFAULTS = (-273.15,
                     8.314,
                     287.0586,
                     21.5e-6,
                     1013.0,
                     0.622,
                     2.501,
                     5.670373e-8,
                     1.075,
                     1.57,
                     1.32,
                     4.57)

Constants = namedtuple('Constants', CONSTANT_FIELDS, defaults=CONSTANT_DEFAULTS)

DEFAULT_CONSTANTS = Constants()
