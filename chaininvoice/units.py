
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

import re

from typing		import Tuple, Union

from .defaults		import DECIMALS
from .errors		import InvalidAmountFormat

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Lossless conversion between human-readable decimal amounts (eg. "10.5" ETH) and the integer base
units (eg. "10500000000000000000" Wei) used on-chain.  No floating point is ever involved; a round
trip through to_base_units and from_base_units yields the normalize'd input.
"""

AMOUNT_RE			= re.compile( r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?" )


def _parse( human: str ) -> Tuple[str,str]:
    """Split a non-negative decimal numeral into its whole and fractional digit strings."""
    if not isinstance( human, str ):
        raise InvalidAmountFormat( f"Amount must be a decimal numeral string, not {human!r}" )
    match			= AMOUNT_RE.fullmatch( human )
    if not match or not ( match.group( 'whole' ) or match.group( 'frac' )):
        raise InvalidAmountFormat( f"Amount {human!r} is not a valid non-negative decimal number" )
    return match.group( 'whole' ) or '', match.group( 'frac' ) or ''


def normalize( human: str ) -> str:
    """The canonical form of a decimal amount: no redundant leading zeros, no trailing fractional
    zeros, and no trailing decimal point.

        >>> normalize( "010.500" )
        '10.5'
        >>> normalize( ".0" )
        '0'

    """
    whole, frac			= _parse( human )
    whole			= whole.lstrip( '0' ) or '0'
    frac			= frac.rstrip( '0' )
    return f"{whole}.{frac}" if frac else whole


def to_base_units( human: str, decimals: int = DECIMALS ) -> str:
    """Convert a human decimal amount into an integer string of base units, at 10^decimals.

        >>> to_base_units( "10.5" )
        '10500000000000000000'

    Any precision beyond 'decimals' fractional digits must be zero; otherwise the amount is not
    representable, and InvalidAmountFormat is raised rather than rounding.  The amount must be
    only digits w/ an optional decimal point; even surrounding whitespace is rejected.

    """
    whole, frac			= _parse( human )
    significant			= frac.rstrip( '0' )
    if len( significant ) > decimals:
        raise InvalidAmountFormat(
            f"Amount {human!r} has more than {decimals} significant fractional digits" )
    frac			= significant.ljust( decimals, '0' )
    return str( int( whole or '0' ) * 10 ** decimals + int( frac or '0' ))


def from_base_units( base: Union[str,int], decimals: int = DECIMALS ) -> str:
    """Convert an integer (or integer string) of base units into a normalized human decimal amount.

        >>> from_base_units( 10500000000000000000 )
        '10.5'

    """
    if isinstance( base, bool ) or not isinstance( base, (int,str) ):
        raise InvalidAmountFormat( f"Base unit amount must be an integer, not {base!r}" )
    if isinstance( base, str ):
        if not base.isdigit() or not base.isascii():
            raise InvalidAmountFormat( f"Base unit amount {base!r} is not a non-negative integer" )
        base			= int( base )
    if base < 0:
        raise InvalidAmountFormat( f"Base unit amount {base!r} is negative" )
    whole, frac			= divmod( base, 10 ** decimals )
    frac_digits			= f"{frac:0{decimals}d}".rstrip( '0' ) if decimals else ''
    return f"{whole}.{frac_digits}" if frac_digits else str( whole )
