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

"""Distributed default settings for Bouncer.

You should not edit the values in this file.  Instead, put your overrides in
bn_cfg.py, after the `from Bouncer.Defaults import *' line.
"""

import os
import tempfile



#####
# Paths
#####

# Where Bouncer keeps its run-time files.  The environment wins over the
# default so that tests and one-off runs need not touch bn_cfg.py.
VAR_PREFIX = os.environ.get('BOUNCER_VAR_PREFIX',
                            os.path.join(tempfile.gettempdir(), 'bouncer'))
LOG_DIR = os.path.join(VAR_PREFIX, 'logs')



#####
# Bounce scanning
#####

# The format engines consulted for every message, in order.  The first engine
# whose header signature matches and which yields at least one record wins.
# Every name must be one of the engines in Bouncer.Bouncers.BouncerAPI.ENGINES.
BOUNCE_PIPELINE = [
    'RFC3464',
    'V5sendmail',
    ]

# Header fields of the original message that are copied out of the embedded
# message part of a bounce.  Names are lower case.
RFC822_HEADERS = (
    # Message-ID and Subject
    'message-id', 'subject',
    # Date
    'date', 'posted-date', 'posted', 'resent-date',
    # Addresser
    'from', 'return-path', 'reply-to', 'errors-to', 'reverse-path',
    'x-postfix-sender', 'envelope-from', 'x-envelope-from',
    # Recipient
    'to', 'delivered-to', 'forward-path', 'envelope-to', 'x-envelope-to',
    'resent-to', 'apparently-to',
    # Mailing lists
    'list-id',
    )

# The subset of RFC822_HEADERS whose values may be folded over several lines.
RFC822_LONG_HEADERS = (
    'to', 'from', 'subject', 'message-id',
    )

# Transport protocol reported for records that do not say otherwise.
DEFAULT_SPEC = 'SMTP'
