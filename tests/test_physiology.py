import numpy as np
import numpy.testing as npt

from pyLeafEB import physiology as ph
from pyLeafEB import stomatal_conductance as stc
from pyLeafEB.leaf import LeafStatus

T_K = 301.15
T_RK = 298.15
R = 8.314


def test_arrhenius_reference_value():
    npt.assert_allclose(ph.arrhenius(42.75, 37830.0, T_K, T_RK, R), 49.76935360399572,
                        rtol=1e-8)


def test_arrhenius_at_reference_temperature():
    npt.assert_allclose(ph.arrhenius(200.0, 58550.0, T_RK, T_RK, R), 200.0)


def test_arrhenius_inhibition_reference_value():
    j_max = ph.arrhenius_inhibition(250.0, 29680.0, T_K, T_RK, 200000.0, 631.88, R)
    npt.assert_allclose(j_max, 278.5161762418, rtol=1e-6)


def test_arrhenius_inhibition_without_entropy_is_arrhenius():
    for A, E_a, T_k in ((42.75, 37830.0, 301.15),
                        (200.0, 58550.0, 288.15),
                        (0.6, 46390.0, 310.15)):
        standard = ph.arrhenius(A, E_a, T_k, T_RK, R)
        modified = ph.arrhenius_inhibition(A, E_a, T_k, T_RK, 200000.0, 0.0, R)
        npt.assert_equal(modified, standard)


def test_gamma_star():
    npt.assert_equal(ph.gamma_star(T_K, T_RK, R), ph.arrhenius(42.75, 37830.0, T_K, T_RK, R))


def test_arrhenius_celsius_does_not_raise():
    y_celsius = ph.arrhenius(42.75, 37830.0, 28.0, 25.0, R)
    assert np.isfinite(y_celsius)
    assert not np.isclose(y_celsius, ph.arrhenius(42.75, 37830.0, T_K, T_RK, R))

    with np.errstate(divide='ignore', invalid='ignore'):
        y_zero = ph.arrhenius(42.75, 37830.0, 0.0, T_RK, R)
        y_nan = ph.arrhenius(42.75, 37830.0, 0.0, 0.0, R)
    assert y_zero == 0.0
    assert np.isnan(y_nan)


def test_j_hyperbolic():
    npt.assert_allclose(ph.j_hyperbolic(0.0, 250.0), 0.0)
    npt.assert_allclose(ph.j_hyperbolic(1e9, 250.0), 250.0, rtol=1e-4)
    apar = np.array([100.0, 500.0, 1500.0])
    j = ph.j_hyperbolic(apar, 250.0)
    assert np.all(np.diff(j) > 0)
    assert np.all(j < 250.0)
    assert np.all(j < 0.425 * apar)


def test_max_root():
    npt.assert_allclose(ph.max_root(1.0, -3.0, 2.0), 2.0)
    npt.assert_equal(ph.max_root(1.0, 0.0, 1.0), 0.0)


def _status(T_l=25.0, PPFD=1500.0):
    return LeafStatus(T_l=T_l, C_s=400.0, D_l=1.0, PPFD=PPFD)


def test_fvcb_parameters_at_reference_temperature():
    model = ph.Fvcb(stc.Medlyn(0.03, 12.0))
    vc_max, j_max, rd, km, tes_star = model.get_photosynthesis_params(25.0)
    npt.assert_allclose(vc_max, model.VcMaxRef)
    npt.assert_allclose(j_max, model.JMaxRef)
    npt.assert_allclose(rd, model.RdRef)
    npt.assert_allclose(tes_star, 42.75)
    npt.assert_allclose(km, 404.9 * (1.0 + 210.0 / 278.4))


def test_fvcb_light():
    status = _status()
    model = ph.Fvcb(stc.Medlyn(0.03, 12.0))
    model.assimilate(status, None)

    assert 0.0 < status.A < 60.0
    # Medlyn closure with D_l = 1 kPa and C_s = 400
    npt.assert_allclose(status.G_s, 0.03 + (1.0 + 12.0) / 400.0 * status.A)
    npt.assert_allclose(status.C_i, status.C_s - status.A / status.G_s)
    assert status.C_i < status.C_s


def test_fvcb_dark():
    status = _status(PPFD=0.0)
    model = ph.Fvcb(stc.Medlyn(0.03, 12.0))
    model.assimilate(status, None)

    npt.assert_allclose(status.A, -model.RdRef)
    assert status.G_s >= model.stomatal_conductance.gs_min
    assert status.C_i == status.C_s


def test_constant_assimilation():
    status = _status()
    model = ph.ConstantAGs(A=25.0, G_s=0.25)
    model.assimilate(status, None)

    npt.assert_equal(status.A, 25.0)
    npt.assert_equal(status.G_s, 0.25)
    npt.assert_allclose(status.C_i, 300.0)


def test_medlyn_minimum_conductance():
    status = LeafStatus(A=-10.0, C_s=400.0, D_l=1.0)
    model = stc.Medlyn(0.03, 12.0, gs_min=0.002)
    closure = model.gs_closure(status, None)
    npt.assert_allclose(closure, 13.0 / 400.0)
    npt.assert_equal(model.gs(status, closure), 0.002)


def test_constant_assimilation_minimum_conductance():
    status = _status()
    model = ph.ConstantAGs(A=25.0, G_s=0.1, gs_min=0.2)
    model.assimilate(status, None)

    npt.assert_equal(status.G_s, 0.2)
    npt.assert_allclose(status.C_i, 400.0 - 25.0 / 0.2)
