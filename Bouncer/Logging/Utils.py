# Copyright (C) 1998-2018 by the Free Software Foundation, Inc.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; either version 2
# of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301,
# USA.

"""Utilities shared by the logging classes."""

import sys
import traceback



def _logexc(logger=None, msg=''):
    sys.__stderr__.write('Logging error: %s\n' % logger)
    traceback.print_exc(file=sys.__stderr__)
    # Be sure to include the original message, so it doesn't get lost
    sys.__stderr__.write('Original log message:\n%s\n' % msg)
