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

"""This is the module which takes your site-specific settings.

From a raw distribution it should be copied to bn_cfg.py.  If you already
have an bn_cfg.py, be careful to add in only the new settings you want.  The
complete set of distributed defaults, with documentation, are in the file
Defaults.py.  In that file, the settings are all in uppercase.

For example, to consult only the Sendmail version 5 engine:

    BOUNCE_PIPELINE = ['V5sendmail']
"""

###############################################
# Here's where we get the distributed defaults.

from Bouncer.Defaults import *

##################################################
# Put YOUR site-specific settings below this line.
