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

"""Test the bounce detection for files containing bounces.

Usage: onebounce [options] file1 ...

Options:
    -h / --help
        Print this text and exit.

    -v / --verbose
        Verbose output.

    -a / --all
        Run the message through all the bounce engines.  Normally this script
        stops at the first one that finds a match.

    -m / --mbox
        The files are Unix mbox files holding any number of bounces.
"""

import sys
import email
import argparse
import mailbox

from Bouncer import Errors
from Bouncer import Message
from Bouncer.Bouncers import BouncerAPI
from Bouncer.Logging.Syslog import syslog
from Bouncer.Mailbox import BounceMailbox
from Bouncer.Version import BOUNCER_VERSION


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='onebounce',
        description='Test the bounce detection for files containing bounces.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')
    parser.add_argument('-a', '--all', action='store_true',
                        help='Run the message through all the bounce engines')
    parser.add_argument('-m', '--mbox', action='store_true',
                        help='The files are Unix mbox files')
    parser.add_argument('--version', action='version',
                        version=BOUNCER_VERSION)
    parser.add_argument('files', nargs='+',
                        help='Files to process')
    return parser.parse_args(argv)


def load_message(path):
    with open(path, 'rb') as fp:
        msg = email.message_from_binary_file(fp)
    if not list(msg.keys()):
        raise Errors.BadMessageError(path)
    return msg


def report(label, msg, pipeline, args, out):
    mhead = Message.headers_of(msg)
    mbody = Message.body_of(msg)
    for engine in pipeline:
        result = None
        if BouncerAPI.matches(engine, mhead):
            result = engine.scan(mhead, mbody)
        if result is None:
            if args.verbose:
                print(label, engine.name, 'found no matches', file=out)
            continue
        records, rfc822 = result
        for record in records:
            print(label, engine.name, 'found', record.recipient, file=out)
            if args.verbose:
                print('    status: %s  command: %s  diagnosis: %s' % (
                    record.status, record.command, record.diagnosis), file=out)
        if not args.all:
            break


def main(argv=None, out=None):
    args = parse_args(argv)
    if out is None:
        out = sys.stdout
    pipeline = BouncerAPI.get_pipeline()
    status = 0
    for file in args.files:
        try:
            if args.mbox:
                mbox = BounceMailbox(file)
                try:
                    count = 0
                    for key, msg in mbox.messages():
                        count += 1
                        report('%s[%s]' % (file, key), msg, pipeline, args,
                               out)
                finally:
                    mbox.close()
                if not count:
                    raise Errors.BadMessageError('no parseable messages')
            else:
                report(file, load_message(file), pipeline, args, out)
        except (OSError, mailbox.NoSuchMailboxError,
                Errors.BadMessageError) as e:
            syslog('error', 'onebounce: cannot read %s: %s', file, e)
            print('%s: cannot read %s' % (file, e), file=sys.stderr)
            status = 1
    return status


if __name__ == '__main__':
    sys.exit(main())
