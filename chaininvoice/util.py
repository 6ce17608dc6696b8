
#
# Python-chaininvoice -- Ethereum Smart Contract Invoicing Client
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-chaininvoice is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-chaininvoice is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#
from __future__		import annotations

import getpass
import logging
import sys

from time		import time as timer  # noqa: F401
from typing		import Union


__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( "util" )

log_cfg				= {
    "level":	logging.WARNING,
    "datefmt":	'%Y-%m-%d %H:%M:%S',
    "format":	'%(asctime)s %(name)-16.16s %(message)s',
}

log_levelmap 			= {
    -2: logging.FATAL,
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def log_level( adjust ):
    """Return a logging level corresponding to the +'ve/-'ve adjustment"""
    return log_levelmap[
        max(
            min(
                adjust,
                max( log_levelmap.keys() )
            ),
            min( log_levelmap.keys() )
        )
    ]


#
# util.is_...		-- Test for various object capabilities
#
def is_mapping( thing ):
    """See if the thing implements the Mapping protocol."""
    return hasattr( thing, 'keys' ) and hasattr( thing, '__getitem__' )


def is_listlike( thing ):
    """Something like a list or tuple; indexable and sized, but not a string, bytes or a class."""
    return not isinstance( thing, (str,bytes,type) ) and hasattr( thing, '__getitem__' ) and hasattr( thing, '__len__' )


def commas( seq, final=None ):  # supply alternative final connector, eg. 'and', 'or'
    """Join a sequence w/ commas; the last two items optionally joined by the 'final' connector, eg:

        >>> commas( [ 'a', 'b', 'c' ], final='and' )
        'a, b and c'

    """
    seq				= list( seq )
    if final and len( seq ) > 1:
        seq			= seq[:-2] + [f"{seq[-2]} {final} {seq[-1]}"]
    return ', '.join( map( str, seq ))


def into_hex( data: Union[bytes,str] ) -> str:
    """Convert bytes (eg. a HexBytes transaction hash) or hex w/ optional '0x' prefix into '0x...' hex"""
    if isinstance( data, (bytes,bytearray) ):
        return '0x' + bytes( data ).hex()
    data			= str( data )
    if data[:2].lower() == '0x':
        data			= data[2:]
    return '0x' + data.lower()


def into_chain_id( value ) -> int:
    """Chain IDs arrive as ints from web3, but as '0x...' hex strings from EIP-1193 wallet events."""
    if isinstance( value, str ):
        return int( value, 16 ) if value[:2].lower() == '0x' else int( value )
    return int( value )


def input_secure( prompt, secret=True, file=None ):
    """When getting secure (optionally secret) input from standard input, we don't want to use getpass, which
    attempts to read from /dev/tty.

    """
    if ( file or sys.stdin ).isatty():
        # From TTY; provide prompts, and do not echo secret input
        if secret:
            return getpass.getpass( prompt, stream=file )
        elif file:
            return file.readline()
        else:
            return input( prompt )
    else:
        # Not a TTY; don't litter pipeline output with prompts
        if file:
            return file.readline()
        return input()
