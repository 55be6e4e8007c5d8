#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
Script to run the leaf energy balance for a single leaf and timestep

Created on Dec 29 2015
@author: Hector Nieto

"""

import logging
import sys

from pyLeafEB.LeafConfigFileInterface import LeafConfigFileInterface

config_file = 'Config_Leaf.txt'


def run_LEB_from_config_file(config_file):
    # Create an interface instance
    setup = LeafConfigFileInterface()
    # Get the data from configuration file
    config_data = setup.parse_input_config(config_file)
    setup.get_data(config_data)
    # Run the model
    out_data = setup.run()

    # Can analyse the out_data pandas Series here
    # print(out_data[['T_l', 'LE', 'H', 'A']])

    return out_data

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    args = sys.argv
    if len(args) > 1:
        config_file = args[1]
    print('Run pyLeafEB with configuration file = ' + str(config_file))
    run_LEB_from_config_file(config_file)
