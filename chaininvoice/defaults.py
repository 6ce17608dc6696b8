
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

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# The deployed InvoiceFactory, and the network it lives on.  Each of these may be overridden by
# the environment (see client.py), or on the command-line.
#
#     INVOICE_FACTORY_ADDRESS, INVOICE_RPC_URL, INVOICE_CHAIN_ID
#
FACTORY_ADDRESS			= '0xeBf4A713F0cd981cf7fF4670f50101BF4519d965'
RPC_URL				= 'https://json-rpc.testnet.swisstronik.com/'
EXPECTED_CHAIN_ID		= 1291		# Swisstronik Testnet

# Amounts are denominated in the network's native 18-decimal units (ie. ETH/Wei)
DECIMALS			= 18

# The on-chain Invoice contract is authoritative for share validation; we only check client-side
# if asked to (eg. --check-shares), against this total.
SHARES_TOTAL			= 100

# Invoice table output format (see tabulate.tabulate_formats)
INVOICE_FORMAT			= 'orgtbl'
