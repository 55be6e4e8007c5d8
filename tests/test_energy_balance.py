"""Tests of the leaf energy balance.

No published outputs of the worked example (T_A = 20 C, u = 1 m s-1, p = 101.3 kPa,
rh = 0.65, Medlyn(0.03, 12)) are available, so the solver is checked against
physical properties, a single pass computed by hand and the iteration history
instead of reference values.
"""

import numpy as np
import numpy.testing as npt

from pyLeafEB import energy_balance as eb
from pyLeafEB import meteo_utils as met
from pyLeafEB import net_radiation as rad
from pyLeafEB import resistances as res
from pyLeafEB.constants import DEFAULT_CONSTANTS as C
from pyLeafEB.leaf import Leaf, LeafGeometry, LeafStatus
from pyLeafEB.physiology import Fvcb, ConstantAGs
from pyLeafEB.stomatal_conductance import Medlyn

T_A = 20.0
RN = 300.0
PPFD = 1500.0
LEAF_WIDTH = 0.03


def _atmosphere(u=1.0):
    return met.Atmosphere.from_meteo(T_A, u, 101.3, 0.65)


def _leaf(photosynthesis=None, **energy_params):
    if photosynthesis is None:
        photosynthesis = Fvcb(Medlyn(0.03, 12.0))
    status = LeafStatus(Rn=RN, sky_fraction=2.0, PPFD=PPFD)
    return Leaf(LeafGeometry(d=LEAF_WIDTH), eb.Monteith(**energy_params), photosynthesis,
                status)


def test_monteith_defaults():
    energy = eb.Monteith()
    assert energy.a_sh == 2
    assert energy.a_sv == 1
    assert energy.emis == 0.955
    assert energy.maxiter == 10
    assert energy.tol == 0.01


def test_latent_sensible_heat_partition_rn():
    args = (300.0, 0.8, 0.18, 50.0, 0.145, 1.2, 2, 1013.0)
    npt.assert_allclose(eb.calc_latent_heat(*args) + eb.calc_sensible_heat(*args), 300.0)


def test_psicr_star():
    npt.assert_allclose(eb.calc_psicr_star(0.067, 2, 1, 40.0, 20.0, 50.0),
                        0.067 * 2 * 60.0 / 50.0)


def test_leaf_temperature():
    npt.assert_allclose(eb.calc_leaf_temperature(20.0, 300.0, 300.0, 1.2, 1013.0, 2, 50.0),
                        20.0)
    assert eb.calc_leaf_temperature(20.0, 300.0, 200.0, 1.2, 1013.0, 2, 50.0) > 20.0


def test_converged_leaf():
    atmosphere = _atmosphere()
    leaf = _leaf(maxiter=100)
    eb.compute_energy_balance(leaf, atmosphere)
    status = leaf.status

    assert status.n_iterations < 100
    assert abs(status.T_l - T_A) < 5.0
    assert status.LE > 0
    assert status.A > 0
    assert status.G_s >= leaf.photosynthesis.stomatal_conductance.gs_min
    assert status.C_i < status.C_s < atmosphere.ca
    # Rn keeps the longwave corrections of all the iterations
    assert status.Rn != RN
    npt.assert_allclose(status.Rn - status.LE - status.H, 0.0, atol=1e-8)


def test_iteration_cap():
    leaf = _leaf()
    eb.compute_energy_balance(leaf, _atmosphere())
    assert 1 <= leaf.status.n_iterations <= leaf.energy.maxiter
    assert np.isfinite(leaf.status.T_l)
    npt.assert_allclose(leaf.status.Rn - leaf.status.LE - leaf.status.H, 0.0, atol=1e-8)


def test_single_iteration():
    atmosphere = _atmosphere()
    leaf = _leaf(photosynthesis=ConstantAGs(A=25.0, G_s=0.25), maxiter=1)
    eb.compute_energy_balance(leaf, atmosphere)
    status = leaf.status
    energy = leaf.energy

    # one pass computed by hand, the leaf starts at air temperature
    Rs_v = 1.0 / res.gsc_to_gsw(res.mol_to_ms(0.25, T_A, atmosphere.p))
    Gb_h = res.gbh_forced(atmosphere.u, LEAF_WIDTH)
    Rb_h = 1.0 / Gb_h
    Rb_v = 1.0 / res.gbh_to_gbw(Gb_h)
    Gbc = res.ms_to_mol(Gb_h, T_A, atmosphere.p) / C.Gbc_to_Gbh
    psicr_star = eb.calc_psicr_star(atmosphere.psicr, 2, 1, Rb_v, Rs_v, Rb_h)
    delta = met.calc_delta_vapor_pressure(T_A - C.K_0)
    LE = eb.calc_latent_heat(RN, atmosphere.vpd, psicr_star, Rb_h, delta,
                             atmosphere.rho, 2, C.c_p)
    H = eb.calc_sensible_heat(RN, atmosphere.vpd, psicr_star, Rb_h, delta,
                              atmosphere.rho, 2, C.c_p)
    T_l_new = eb.calc_leaf_temperature(T_A, RN, LE, atmosphere.rho, C.c_p, 2, Rb_h)
    if abs(T_l_new - T_A) <= energy.tol:
        T_l_new = T_A

    assert status.n_iterations == 1
    npt.assert_equal(status.R_ll, 0.0)
    npt.assert_allclose(status.Rn, RN)
    npt.assert_allclose(status.Gb_h, Gb_h)
    npt.assert_allclose(status.C_s, atmosphere.ca - 25.0 / Gbc)
    npt.assert_allclose(status.LE, LE)
    npt.assert_allclose(status.H, H)
    npt.assert_allclose(status.T_l, T_l_new)
    # assimilation runs before the surface CO2 update of the pass
    npt.assert_allclose(status.C_i, atmosphere.ca - 25.0 / 0.25)


def test_iterates_do_not_diverge():
    atmosphere = _atmosphere()
    temperatures = [T_A]
    for maxiter in range(1, 9):
        leaf = _leaf(maxiter=maxiter)
        eb.compute_energy_balance(leaf, atmosphere)
        temperatures.append(leaf.status.T_l)

    diffs = np.abs(np.diff(temperatures))
    assert np.max(diffs[1:]) <= diffs[0]
    assert diffs[-1] < diffs[0]


def test_converged_temperature_is_pre_update():
    atmosphere = _atmosphere()
    leaf = _leaf(maxiter=100)
    eb.compute_energy_balance(leaf, atmosphere)
    status = leaf.status
    assert status.n_iterations < 100

    # temperature predicted from the reported fluxes
    T_l_new = T_A + (status.Rn - status.LE) / (atmosphere.rho * C.c_p * 2 * status.Gb_h)
    assert abs(T_l_new - status.T_l) <= leaf.energy.tol
    assert T_l_new != status.T_l


def test_zero_wind_propagates_inf():
    leaf = _leaf(photosynthesis=ConstantAGs(A=25.0, G_s=0.25))
    eb.compute_energy_balance(leaf, _atmosphere(u=0.0))
    status = leaf.status

    assert status.n_iterations == leaf.energy.maxiter
    assert status.Gb_h == 0.0
    assert status.C_s == -np.inf
    assert np.isnan(status.T_l)
    assert np.isnan(status.LE)


def test_shared_inputs_not_modified():
    atmosphere = _atmosphere()
    leaf = _leaf(maxiter=100)
    energy = leaf.energy
    meteo = tuple(atmosphere)
    eb.compute_energy_balance(leaf, atmosphere, C)

    assert tuple(atmosphere) == meteo
    assert energy == eb.Monteith(maxiter=100)
    assert leaf.geometry == LeafGeometry(d=LEAF_WIDTH)


def test_default_constants():
    atmosphere = _atmosphere()
    leaf_1 = _leaf()
    leaf_2 = _leaf()
    eb.compute_energy_balance(leaf_1, atmosphere)
    leaf_2.energy.solve(leaf_2, atmosphere, C)

    for var in ('T_l', 'Rn', 'LE', 'H', 'A', 'G_s', 'C_i', 'C_s', 'n_iterations'):
        npt.assert_equal(getattr(leaf_1.status, var), getattr(leaf_2.status, var))


def test_light_interception():
    atmosphere = met.Atmosphere.from_meteo(T_A, 1.0, 101.3, 0.65, Ri_PAR_f=328.0)
    status = LeafStatus(Rn=RN, sky_fraction=2.0, LAI=0.0)
    leaf = Leaf(LeafGeometry(d=LEAF_WIDTH), eb.Monteith(), Fvcb(Medlyn(0.03, 12.0)), status,
                light_interception=rad.Beer(0.5))
    eb.compute_energy_balance(leaf, atmosphere)

    npt.assert_allclose(leaf.status.PPFD, 328.0 * C.J_to_umol)
    assert leaf.status.A > 0


def test_rn_accumulates_longwave_corrections():
    atmosphere = _atmosphere()
    expected_Rn = np.float64(RN)
    for maxiter in range(1, 4):
        leaf = _leaf(maxiter=maxiter)
        eb.compute_energy_balance(leaf, atmosphere)
        assert leaf.status.n_iterations == maxiter

        # R_ll holds the correction of the last pass
        expected_Rn = expected_Rn + leaf.status.R_ll
        npt.assert_equal(leaf.status.Rn, expected_Rn)
        if maxiter > 1:
            assert leaf.status.R_ll != 0.0
