# This file is part of pyLeafEB for calculating the leaf gas exchange and energy balance
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
pyLeafEB: leaf gas exchange and energy balance.

Solves for a single leaf and timestep the coupled photosynthesis, stomatal
conductance and Penman-Monteith energy balance, see :doc:`energy_balance`.
'''
