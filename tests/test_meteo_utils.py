import logging

import numpy.testing as npt
import pytest

from pyLeafEB import meteo_utils as met
from pyLeafEB.constants import DEFAULT_CONSTANTS


def test_atmosphere_from_meteo():
    atmosphere = met.Atmosphere.from_meteo(20.0, 1.0, 101.3, 0.65)

    npt.assert_allclose(atmosphere.es, 2.337, rtol=1e-3)
    npt.assert_allclose(atmosphere.ea, 0.65 * atmosphere.es)
    npt.assert_allclose(atmosphere.vpd, atmosphere.es - atmosphere.ea)
    assert 1.18 < atmosphere.rho < 1.22
    assert 0.06 < atmosphere.psicr < 0.07
    assert 0.7 < atmosphere.emis < 0.9
    npt.assert_allclose(atmosphere.lambda_, 1e6 * (2.501 - 2.361e-3 * 20.0))
    assert atmosphere.ca == 400.0


def test_delta_vapor_pressure():
    # FAO56 tabulated value at 20 Celsius
    npt.assert_allclose(met.calc_delta_vapor_pressure(293.15), 0.1447, rtol=1e-3)


def test_atmosphere_pressure():
    with pytest.raises(ValueError):
        met.Atmosphere.from_meteo(20.0, 1.0, 0.0, 0.65)


def test_atmosphere_humidity_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='pyLeafEB.meteo_utils'):
        atmosphere = met.Atmosphere.from_meteo(20.0, 1.0, 101.3, 1.2)
    assert 'outside the 0-1 range' in caplog.text
    assert atmosphere.vpd < 0


def test_atmosphere_custom_constants():
    default = met.Atmosphere.from_meteo(20.0, 1.0, 101.3, 0.65)
    constants = DEFAULT_CONSTANTS._replace(R_d=300.0, lambda_0=2.45)
    custom = met.Atmosphere.from_meteo(20.0, 1.0, 101.3, 0.65, constants=constants)

    npt.assert_allclose(custom.rho, default.rho * DEFAULT_CONSTANTS.R_d / 300.0)
    npt.assert_allclose(custom.lambda_, 1e6 * (2.45 - 2.361e-3 * 20.0))
    npt.assert_allclose(custom.psicr, default.psicr * default.lambda_ / custom.lambda_)
