# This file is part of pyLeafEB, consisting of high level pyLeafEB scripting
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

from configparser import ConfigParser, NoOptionError
import itertools
from os import makedirs
from os.path import dirname, exists

import pandas as pd

from . import energy_balance as eb
from . import stomatal_conductance as stc
from .energy_balance import Monteith, compute_energy_balance
from .leaf import Leaf, LeafGeometry, LeafStatus
from .meteo_utils import Atmosphere
from .net_radiation import Beer
from .physiology import Fvcb, ConstantAGs


class ParserError(Exception):

    def __init__(self, parameter, expected_type):
        self.param = parameter
        self.type = expected_type


class MyConfigParser(ConfigParser):

    def __init__(self, top_section, *args, **kwargs):
        super().__init__(*args, inline_comment_prefixes=('#',), **kwargs)
        self.section = top_section

    def myget(self, option, **kwargs):
        return super().get(self.section, option, **kwargs)

    def getint(self, option, **kwargs):
        try:
            val = super().getint(self.section, option, **kwargs)
        except ValueError:
            raise ParserError(option, 'int')

        return val

    def getfloat(self, option, **kwargs):
        try:
            val = super().getfloat(self.section, option, **kwargs)
        except ValueError:
            raise ParserError(option, 'float')

        return val

    def has_option(self, option):
        return super().has_option(self.section, option)


class LeafConfigFileInterface():

    METEO_VARS = [
        'T_A',
        'u',
        'p',
        'rh'
    ]

    LEAF_PROPERTIES = [
        'leaf_width',
        'Rn',
        'sky_fraction'
    ]

    # Optional parameters of the Farquhar-von Caemmerer-Berry model
    FVCB_PARAMETERS = [
        'VcMaxRef',
        'JMaxRef',
        'RdRef',
        'alpha',
        'theta'
    ]

    OUTPUT_VARS = [
        'T_l',
        'Rn',
        'R_ll',
        'PPFD',
        'C_s',
        'D_l',
        'H',
        'LE',
        'A',
        'G_s',
        'C_i',
        'Gb_h',
        'n_iterations'
    ]

    def __init__(self):

        self.params = {}
        self.ready = False

    @staticmethod
    def parse_input_config(input_file, **kwargs):
        ''' Parses the information contained in a configuration file into a dictionary'''

        parser = MyConfigParser('top')
        with open(input_file) as conf_file:
            conf_file = itertools.chain(('[top]',), conf_file)  # dummy section to please parser
            parser.read_file(conf_file)

        return parser

    @staticmethod
    def _parse_meteo_config(parser, conf):
        """Parse the meteorological forcing"""

        conf.update({p: parser.getfloat(p) for p in LeafConfigFileInterface.METEO_VARS})
        conf['ca'] = parser.getfloat('ca', fallback=400.)
        conf['Ri_PAR_f'] = parser.getfloat('Ri_PAR_f', fallback=float('nan'))

        return conf

    @staticmethod
    def _parse_leaf_config(parser, conf):
        """Parse the leaf properties and its light environment"""

        conf.update({p: parser.getfloat(p) for p in LeafConfigFileInterface.LEAF_PROPERTIES})

        # Either the absorbed PPFD is given or it is computed with Beer-Lambert
        if parser.has_option('LAI'):
            conf['LAI'] = parser.getfloat('LAI')
            conf['k_beer'] = parser.getfloat('k_beer', fallback=0.5)
            conf['Ri_PAR_f'] = parser.getfloat('Ri_PAR_f')
        else:
            conf['PPFD'] = parser.getfloat('PPFD')

        return conf

    @staticmethod
    def _parse_energy_config(parser, conf):
        """Parse the energy balance parameters"""

        conf['a_sh'] = parser.getfloat('a_sh', fallback=eb.A_SH)
        conf['a_sv'] = parser.getfloat('a_sv', fallback=eb.A_SV)
        conf['emis_leaf'] = parser.getfloat('emis_leaf', fallback=eb.EMIS_LEAF)
        conf['maxiter'] = parser.getint('maxiter', fallback=eb.ITERATIONS)
        conf['tol'] = parser.getfloat('tol', fallback=eb.TOL)

        return conf

    @staticmethod
    def _parse_gas_exchange_config(parser, conf):
        """Parse the photosynthesis and stomatal conductance models"""

        conf['photosynthesis'] = parser.myget('photosynthesis', fallback='Fvcb')
        conf['gs_min'] = parser.getfloat('gs_min', fallback=stc.GS_MIN)

        if conf['photosynthesis'] == 'ConstantAGs':
            conf['A'] = parser.getfloat('A')
            conf['G_s'] = parser.getfloat('G_s')
            return conf

        conf.update({p: parser.getfloat(p) for p in LeafConfigFileInterface.FVCB_PARAMETERS
                     if parser.has_option(p)})

        conf['stomatal_conductance'] = parser.myget('stomatal_conductance',
                                                    fallback='Medlyn')
        if conf['stomatal_conductance'] == 'ConstantGs':
            conf['G_s'] = parser.getfloat('G_s')
        else:
            conf['g0'] = parser.getfloat('g0')
            conf['g1'] = parser.getfloat('g1')

        return conf

    def get_data(self, parser):
        '''Parses the parameters in a configuration file directly to pyLeafEB variables for
           running the leaf energy balance'''

        conf = {}
        conf['output_file'] = parser.myget('output_file', fallback='')

        try:
            conf = self._parse_meteo_config(parser, conf)
            conf = self._parse_leaf_config(parser, conf)
            conf = self._parse_energy_config(parser, conf)
            conf = self._parse_gas_exchange_config(parser, conf)
            self.ready = True
        except NoOptionError as e:
            print(f'Error: missing parameter {e.option}')
        except ParserError as e:
            print(f'Error: could not parse parameter {e.param} as type {e.type}')

        self.params = conf

    def _get_photosynthesis(self):
        ''' Photosynthesis model bound to its stomatal conductance model, None if any of
        the models is unknown'''

        p = self.params
        if p['photosynthesis'] == 'ConstantAGs':
            return ConstantAGs(A=p['A'], G_s=p['G_s'], gs_min=p['gs_min'])
        elif p['photosynthesis'] != 'Fvcb':
            print("Unknown photosynthesis model: " + p['photosynthesis'] + "!")
            return None

        if p['stomatal_conductance'] == 'Medlyn':
            gs_model = stc.Medlyn(p['g0'], p['g1'], gs_min=p['gs_min'])
        elif p['stomatal_conductance'] == 'ConstantGs':
            gs_model = stc.ConstantGs(p['G_s'], gs_min=p['gs_min'])
        else:
            print("Unknown stomatal conductance model: " + p['stomatal_conductance'] + "!")
            return None

        fvcb_params = {k: p[k] for k in self.FVCB_PARAMETERS if k in p}
        return Fvcb(gs_model, **fvcb_params)

    def build_leaf(self):
        ''' Creates the leaf and its atmosphere from the parsed parameters.

        Returns
        -------
        leaf : Leaf
        atmosphere : Atmosphere
        '''

        p = self.params
        photosynthesis = self._get_photosynthesis()
        if photosynthesis is None:
            return None, None

        atmosphere = Atmosphere.from_meteo(p['T_A'], p['u'], p['p'], p['rh'],
                                           ca=p['ca'], Ri_PAR_f=p['Ri_PAR_f'])

        status = LeafStatus(Rn=p['Rn'], sky_fraction=p['sky_fraction'])
        if 'LAI' in p:
            status.LAI = p['LAI']
            light_interception = Beer(p['k_beer'])
        else:
            status.PPFD = p['PPFD']
            light_interception = None

        energy = Monteith(a_sh=p['a_sh'],
                          a_sv=p['a_sv'],
                          emis=p['emis_leaf'],
                          maxiter=p['maxiter'],
                          tol=p['tol'])

        leaf = Leaf(LeafGeometry(d=p['leaf_width']),
                    energy,
                    photosynthesis,
                    status,
                    light_interception=light_interception)
        return leaf, atmosphere

    def write_output(self, out_data):
        ''' Writes the leaf outputs as a single tab separated row'''

        # Create the ouput directory if it doesn't exist
        outdir = dirname(self.params['output_file'])
        if outdir and not exists(outdir):
            makedirs(outdir)

        out_data.to_frame().T.to_csv(self.params['output_file'],
                                     sep='\t',
                                     index=False)

    def run(self):

        if not self.ready:
            print("pyLeafEB will not be run due to errors in the input data.")
            return None

        try:
            leaf, atmosphere = self.build_leaf()
        except ValueError as e:
            print(f'Error: {e}')
            return None
        if leaf is None:
            return None

        compute_energy_balance(leaf, atmosphere)

        out_data = pd.Series({var: getattr(leaf.status, var) for var in self.OUTPUT_VARS})

        if self.params['output_file']:
            self.write_output(out_data)

        print('Done')
        return out_data
