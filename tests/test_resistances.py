import numpy as np
import numpy.testing as npt

from pyLeafEB import net_radiation as rad
from pyLeafEB import resistances as res
from pyLeafEB.leaf import LeafStatus
from pyLeafEB.meteo_utils import Atmosphere


def test_gbh_free():
    npt.assert_equal(res.gbh_free(20.0, 20.0, 0.03), 0.0)
    npt.assert_equal(res.gbh_free(20.0, 18.0, 0.03), 0.0)
    g_warm = res.gbh_free(20.0, np.array([21.0, 25.0]), 0.03)
    assert np.all(g_warm > 0)
    assert g_warm[1] > g_warm[0]


def test_gbh_forced():
    npt.assert_allclose(res.gbh_forced(1.0, 0.03), 0.003 * np.sqrt(1.0 / 0.03))
    npt.assert_equal(res.gbh_forced(0.0, 0.03), 0.0)


def test_boundary_layer_conductance():
    npt.assert_allclose(res.boundary_layer_conductance(20.0, 22.0, 1.0, 0.03),
                        res.gbh_free(20.0, 22.0, 0.03) + res.gbh_forced(1.0, 0.03))


def test_conductance_2_resistance():
    npt.assert_allclose(res.conductance_2_resistance(0.02), 50.0)
    with np.errstate(divide='ignore'):
        assert np.isinf(res.conductance_2_resistance(0.0))


def test_conductance_units():
    g_mol = res.ms_to_mol(0.01, 20.0, 101.3)
    npt.assert_allclose(g_mol, 0.01 * 101.3e3 / (8.314 * 293.15))
    npt.assert_allclose(res.mol_to_ms(g_mol, 20.0, 101.3), 0.01)
    npt.assert_allclose(res.gbh_to_gbw(1.0), 1.075)
    npt.assert_allclose(res.gsc_to_gsw(1.0), 1.57)


def test_net_longwave_radiation():
    npt.assert_equal(rad.net_longwave_radiation(20.0, 20.0, 0.955, 0.8, 2.0), 0.0)
    # a leaf warmer than the air loses energy
    assert rad.net_longwave_radiation(25.0, 20.0, 0.955, 0.8, 2.0) < 0
    assert rad.net_longwave_radiation(15.0, 20.0, 0.955, 0.8, 2.0) > 0
    assert rad.net_longwave_radiation(25.0, 20.0, 0.955, 0.8, 0.0) == 0.0
    npt.assert_allclose(rad.net_longwave_radiation(25.0, 20.0, 0.955, 0.8, 2.0),
                        2.0 * rad.net_longwave_radiation(25.0, 20.0, 0.955, 0.8, 1.0))


def test_beer():
    npt.assert_allclose(rad.calc_ppfd_beer(300.0, 0.0, 0.5), 300.0 * 4.57)
    npt.assert_allclose(rad.calc_ppfd_beer(300.0, 2.0, 0.5), 300.0 * 4.57 * np.exp(-1.0))

    atmosphere = Atmosphere.from_meteo(20.0, 1.0, 101.3, 0.65, Ri_PAR_f=300.0)
    status = LeafStatus(LAI=2.0)
    rad.Beer(0.5).light_interception(status, atmosphere)
    npt.assert_allclose(status.PPFD, 300.0 * 4.57 * np.exp(-1.0))
