# This file is part of pyLeafEB for estimating leaf photosynthesis
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
Temperature dependence of the photosynthetic parameters and leaf CO2 assimilation
models. Assimilation models expose a single method,
``assimilate(status, atmosphere, constants)``, that updates the net assimilation
``A``, the stomatal conductance ``G_s`` and the intercellular CO2 ``C_i`` of a
:class:`~pyLeafEB.leaf.LeafStatus` in place. The energy balance only relies on that
method, so any model family can be plugged into a leaf.

PACKAGE CONTENTS
================
Temperature response
--------------------
* :func:`arrhenius` Arrhenius temperature function.
* :func:`arrhenius_inhibition` Arrhenius function with high temperature inhibition.
* :func:`gamma_star` CO2 compensation point in the absence of respiration.
* :func:`get_km` Effective Michaelis-Menten coefficient for CO2.

Photosynthesis
--------------
* :func:`j_hyperbolic` Electron transport rate.
* :func:`calc_ci_j` Intercellular CO2 for the electron transport limited rate.
* :func:`calc_ci_v` Intercellular CO2 for the Rubisco limited rate.
* :class:`Fvcb` Farquhar-von Caemmerer-Berry model coupled with stomatal conductance.
* :class:`ConstantAGs` Constant assimilation and stomatal conductance.
'''

import numpy as np

from .constants import DEFAULT_CONSTANTS
from .stomatal_conductance import ConstantGs, GS_MIN

# universal gas constant
GAS_CONSTANT = DEFAULT_CONSTANTS.R  # (J/K mol)
# intercellular O2 mol fraction (mmol mol-1)
OI = 210.
# Vj - Rd below which the leaf is considered in the dark
DARK_THRES = 1.0e-6

DEFAULT_C_KC = (404.9, 79430.0)  # Bonan2011
DEFAULT_C_KO = (278.4, 36380.0)  # Bonan2011
DEFAULT_C_TES = (42.75, 37830.0)  # Bonan2011


def arrhenius(A, E_a, T_k, T_rk, R=GAS_CONSTANT):
    """Arrhenius function for the temperature dependence of a rate constant.

    Parameters
    ----------
    A : float or array_like
        Pre-exponential factor, value of the parameter at the reference temperature.
    E_a : float or array_like
        Activation energy (J mol-1)
    T_k : float or array_like
        Temperature (Kelvin)
    T_rk : float or array_like
        Reference temperature (Kelvin) at which A was measured
    R : float
        Universal gas constant (J mol-1 K-1)

    Returns
    -------
    y : float or array_like
        Parameter at temperature T_k

    Notes
    -----
    Temperatures must be given in Kelvin, no check is done.
    A zero temperature returns inf or nan.
    """
    A, E_a, T_k, T_rk = map(np.asarray, (A, E_a, T_k, T_rk))
    y = A * np.exp(E_a * (T_k - T_rk) / (R * T_k * T_rk))
    return np.asarray(y)


def arrhenius_inhibition(A, E_a, T_k, T_rk, H_d, delta_s, R=GAS_CONSTANT):
    """Arrhenius function modified to consider the negative effect of very high
    temperatures, after [Medlyn2002]_ Eq. 17.

    Parameters
    ----------
    A : float or array_like
        Pre-exponential factor, value of the parameter at the reference temperature.
    E_a : float or array_like
        Activation energy (J mol-1), the exponential rate of rise of the function.
    T_k : float or array_like
        Temperature (Kelvin)
    T_rk : float or array_like
        Reference temperature (Kelvin) at which A was measured
    H_d : float or array_like
        Rate of decrease of the function above the optimum (J mol-1)
    delta_s : float or array_like
        Entropy factor (J mol-1 K-1)
    R : float
        Universal gas constant (J mol-1 K-1)

    Returns
    -------
    y : float or array_like
        Parameter at temperature T_k

    References
    ----------
    .. [Medlyn2002] Medlyn, B.E., Dreyer, E., Ellsworth, D., Forstreuter, M.,
        Harley, P.C., Kirschbaum, M.U.F., Le Roux, X., Montpied, P.,
        Strassemeyer, J., Walcroft, A. and Wang, K., 2002.
        Temperature response of parameters of a biochemically based model of
        photosynthesis. II. A review of experimental data.
        Plant, Cell & Environment, 25(9), pp.1167-1179.
        https://doi.org/10.1046/j.1365-3040.2002.00891.x
    """
    T_k, T_rk, H_d, delta_s = map(np.asarray, (T_k, T_rk, H_d, delta_s))
    f_t = arrhenius(A, E_a, T_k, T_rk, R=R)
    f_ref = 1. + np.exp((T_rk * delta_s - H_d) / (T_rk * R))
    f_d = 1. + np.exp((T_k * delta_s - H_d) / (T_k * R))
    # keep this order so that delta_s = 0 returns exactly the standard form
    y = f_t * f_ref / f_d
    return np.asarray(y)


def gamma_star(T_k, T_rk, R=GAS_CONSTANT):
    """CO2 compensation point in the absence of dark respiration (micromol mol-1),
    [Medlyn2002]_ Eq. 12.

    Parameters
    ----------
    T_k : float or array_like
        Temperature (Kelvin)
    T_rk : float or array_like
        Reference temperature (Kelvin)
    R : float
        Universal gas constant (J mol-1 K-1)
    """
    return arrhenius(*DEFAULT_C_TES, T_k, T_rk, R=R)


def get_km(T_k, T_rk, O2=OI, R=GAS_CONSTANT):
    """Effective Michaelis-Menten coefficient for CO2 (micromol mol-1),
    [Medlyn2002]_ Eqs. 5 and 6.

    Parameters
    ----------
    T_k : float or array_like
        Temperature (Kelvin)
    T_rk : float or array_like
        Reference temperature (Kelvin)
    O2 : float
        intercellular O2 mol fraction (mmol mol-1)
    R : float
        Universal gas constant (J mol-1 K-1)
    """
    kc = arrhenius(*DEFAULT_C_KC, T_k, T_rk, R=R)
    ko = arrhenius(*DEFAULT_C_KO, T_k, T_rk, R=R)
    return np.asarray(kc * (1. + O2 / ko))


def j_hyperbolic(apar, j_max, alpha=0.425, theta=0.7):
    r"""Compute electron transport rate based on [Farquhar_1984]_ non-rectangular
    hyperbolic function.

    $\theta J^2  - ( \alpha Q + J_{lmax} ) J + \alpha Q J_{lmax} = 0$

    Parameters
    ----------
    apar : float or array_like
        Absorbed photon flux density (micromol m-2 s-1)
    j_max : float or array_like
        Maximum electron transport rate (micromol m-2 s-1)
    alpha : float or array_like
        Quantum yield (mol electrons / mol quanta).
    theta : float or array_like
        curvature of leaf response of electron transport to irradiance.

    Returns
    -------
    j : float or array_like
        Electron transport rate (micromol m-2 s-1)

    References
    ----------
    .. [Farquhar_1984] Farquhar, G.D. and Wong, S.C.,
        An empirical model of stomatal conductance. (1984)
        Functional Plant Biology, 11(3), pp.191-210.
        https://doi.org/10.1071/PP9840191
    """
    apar, j_max = map(np.asarray, (apar, j_max))
    b = alpha * apar + j_max
    j = (b - np.sqrt(b ** 2 - 4. * alpha * theta * apar * j_max)) / (2. * theta)
    return np.asarray(j)


def max_root(a, b, c):
    """Largest root of a x^2 + b x + c, 0 if there is no real distinct root."""
    a, b, c = map(np.asarray, (a, b, c))
    delta = b ** 2 - 4. * a * c
    x = np.where(delta > 0., (-b + np.sqrt(np.abs(delta))) / (2. * a), 0.)
    return np.asarray(x)


def calc_ci_j(v_j, tes_star, c_s, rd, g0, gs_closure):
    """Intercellular CO2 (micromol mol-1) for the electron transport limited rate.

    Solves jointly the electron transport limited assimilation
    ``A = v_j (ci - tes_star) / (ci + 2 tes_star) - rd`` with the CO2 diffusion
    through the stomata ``A = (g0 + gs_closure A) (c_s - ci)``.

    Parameters
    ----------
    v_j : float or array_like
        RuBP regeneration rate, J/4 (micromol m-2 s-1)
    tes_star : float or array_like
        CO2 compensation point in the absence of dark respiration (micromol mol-1)
    c_s : float or array_like
        CO2 concentration at the leaf surface (micromol mol-1)
    rd : float or array_like
        Dark respiration (micromol m-2 s-1)
    g0 : float
        Residual stomatal conductance (mol m-2 s-1)
    gs_closure : float or array_like
        Stomatal closure term, slope of the conductance to assimilation

    References
    ----------
    .. [Duursma2012] Duursma, R.A. and Medlyn, B.E., 2012. MAESPA: a model to study
        interactions between water limitation, environmental drivers and vegetation
        function at tree and stand levels. Geoscientific Model Development 5(4), 919-940.
        https://doi.org/10.5194/gmd-5-919-2012
    """
    a = g0 + gs_closure * (v_j - rd)
    b = ((1. - c_s * gs_closure) * (v_j - rd)
         + g0 * (2. * tes_star - c_s)
         - gs_closure * (v_j * tes_star + 2. * tes_star * rd))
    c = (-(1. - c_s * gs_closure) * tes_star * (v_j + 2. * rd)
         - g0 * 2. * tes_star * c_s)
    return max_root(a, b, c)


def calc_ci_v(vc_max, tes_star, c_s, rd, g0, gs_closure, km):
    """Intercellular CO2 (micromol mol-1) for the Rubisco limited rate.

    Same as :func:`calc_ci_j` with ``A = vc_max (ci - tes_star) / (ci + km) - rd``.
    """
    a = g0 + gs_closure * (vc_max - rd)
    b = ((1. - c_s * gs_closure) * (vc_max - rd)
         + g0 * (km - c_s)
         - gs_closure * (vc_max * tes_star + km * rd))
    c = (-(1. - c_s * gs_closure) * (vc_max * tes_star + km * rd)
         - g0 * km * c_s)
    return max_root(a, b, c)


class AssimilationModel():
    ''' Base class of the photosynthesis models used by the leaf energy balance.

    Parameters
    ----------
    stomatal_conductance : StomatalConductanceModel
        Model computing the stomatal conductance from the assimilation.
    '''

    def __init__(self, stomatal_conductance):
        self.stomatal_conductance = stomatal_conductance

    def assimilate(self, status, atmosphere, constants=DEFAULT_CONSTANTS):
        ''' Updates status.A, status.G_s and status.C_i in place.'''
        raise NotImplementedError


class Fvcb(AssimilationModel):
    ''' Farquhar-von Caemmerer-Berry C3 photosynthesis [Farquhar1980]_ coupled with a
    stomatal conductance model, with the temperature responses of [Medlyn2002]_ and
    the analytical solution of MAESPA [Duursma2012]_.

    Parameters
    ----------
    stomatal_conductance : StomatalConductanceModel
        e.g. ``Medlyn(0.03, 12.0)``.
    T_r : float
        Reference temperature of the parameters (Celsius).
    VcMaxRef : float
        Maximum rate of Rubisco activity at T_r (micromol m-2 s-1).
    JMaxRef : float
        Maximum rate of electron transport at T_r (micromol m-2 s-1).
    RdRef : float
        Mitochondrial respiration at T_r (micromol m-2 s-1).
    TPURef : float
        Triose phosphate utilization rate (micromol m-2 s-1).
    E_ar, E_aj, E_av : float
        Activation energies of Rd, JMax and VcMax (J mol-1).
    O2 : float
        intercellular O2 mol fraction (mmol mol-1).
    H_dj, H_dv : float
        Deactivation energies of JMax and VcMax (J mol-1).
    delta_sj, delta_sv : float
        Entropy terms of JMax and VcMax (J mol-1 K-1).
    alpha : float
        Quantum yield of electron transport (mol electrons mol-1 photon).
    theta : float
        Curvature of the light response of electron transport.

    References
    ----------
    .. [Farquhar1980] Farquhar, G.D., von Caemmerer, S. and Berry, J.A., 1980.
        A biochemical model of photosynthetic CO2 assimilation in leaves of C3 species.
        Planta 149(1), 78-90.
    '''

    def __init__(self,
                 stomatal_conductance,
                 T_r=25.0,
                 VcMaxRef=200.0,
                 JMaxRef=250.0,
                 RdRef=0.6,
                 TPURef=9999.0,
                 E_ar=46390.0,
                 O2=OI,
                 E_aj=29680.0,
                 H_dj=200000.0,
                 delta_sj=631.88,
                 E_av=58550.0,
                 H_dv=200000.0,
                 delta_sv=629.26,
                 alpha=0.425,
                 theta=0.7):

        super().__init__(stomatal_conductance)
        self.T_r = T_r
        self.VcMaxRef = VcMaxRef
        self.JMaxRef = JMaxRef
        self.RdRef = RdRef
        self.TPURef = TPURef
        self.E_ar = E_ar
        self.O2 = O2
        self.E_aj = E_aj
        self.H_dj = H_dj
        self.delta_sj = delta_sj
        self.E_av = E_av
        self.H_dv = H_dv
        self.delta_sv = delta_sv
        self.alpha = alpha
        self.theta = theta

    def get_photosynthesis_params(self, T_l, constants=DEFAULT_CONSTANTS):
        ''' Photosynthetic parameters at leaf temperature T_l (Celsius).

        Returns
        -------
        vc_max, j_max, rd, km, tes_star : float
        '''
        T_k = T_l - constants.K_0
        T_rk = self.T_r - constants.K_0
        R = constants.R

        tes_star = gamma_star(T_k, T_rk, R)
        km = get_km(T_k, T_rk, self.O2, R)
        j_max = arrhenius_inhibition(self.JMaxRef, self.E_aj, T_k, T_rk,
                                     self.H_dj, self.delta_sj, R)
        vc_max = arrhenius_inhibition(self.VcMaxRef, self.E_av, T_k, T_rk,
                                      self.H_dv, self.delta_sv, R)
        rd = arrhenius(self.RdRef, self.E_ar, T_k, T_rk, R)
        return vc_max, j_max, rd, km, tes_star

    def assimilate(self, status, atmosphere, constants=DEFAULT_CONSTANTS):
        vc_max, j_max, rd, km, tes_star = self.get_photosynthesis_params(status.T_l,
                                                                         constants)
        # RuBP regeneration
        v_j = j_hyperbolic(status.PPFD, j_max, alpha=self.alpha, theta=self.theta) / 4.

        gs_closure = self.stomatal_conductance.gs_closure(status, atmosphere)
        g0 = self.stomatal_conductance.g0
        c_s = status.C_s

        if v_j - rd < DARK_THRES:
            ci_j = c_s
        else:
            ci_j = calc_ci_j(v_j, tes_star, c_s, rd, g0, gs_closure)

        # Electron transport limited rate, written with Vj = J/4
        w_j = v_j * (ci_j - tes_star) / (ci_j + 2. * tes_star)
        if w_j - rd < DARK_THRES:
            ci_j = c_s
            w_j = v_j * (ci_j - tes_star) / (ci_j + 2. * tes_star)

        ci_v = calc_ci_v(vc_max, tes_star, c_s, rd, g0, gs_closure, km)
        if ci_v <= 0. or ci_v > c_s:
            w_v = 0.
        else:
            w_v = vc_max * (ci_v - tes_star) / (ci_v + km)

        status.A = np.float64(min(w_v, w_j, 3. * self.TPURef) - rd)
        status.G_s = np.float64(self.stomatal_conductance.gs(status, gs_closure))
        status.C_i = np.float64(min(c_s, c_s - status.A / status.G_s))


class ConstantAGs(AssimilationModel):
    ''' Constant assimilation and stomatal conductance, mostly for forcing the energy
    balance with measured gas exchange.

    Parameters
    ----------
    A : float
        Net assimilation (micromol m-2 s-1).
    G_s : float
        Stomatal conductance to CO2 (mol m-2 s-1).
    gs_min : float
        Minimum stomatal conductance allowed (mol m-2 s-1).
    '''

    def __init__(self, A=25.0, G_s=0.25, gs_min=GS_MIN):
        super().__init__(ConstantGs(G_s, gs_min=gs_min))
        self.A = A

    def assimilate(self, status, atmosphere, constants=DEFAULT_CONSTANTS):
        status.A = np.float64(self.A)
        gs_closure = self.stomatal_conductance.gs_closure(status, atmosphere)
        status.G_s = np.float64(self.stomatal_conductance.gs(status, gs_closure))
        status.C_i = status.C_s - status.A / status.G_s
