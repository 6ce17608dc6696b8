
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

from __future__          import annotations

import asyncio
import click
import dataclasses
import json
import logging
import os

from ..client		import InvoiceClient
from ..defaults		import DECIMALS, RPC_URL, SHARES_TOTAL
from ..errors		import InvalidAmountFormat
from ..invoice		import InvoiceDraft, invoices_table
from ..units		import to_base_units, from_base_units
from ..util		import log_cfg, log_level, input_secure
from ..wallet		import Web3Wallet

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Provide basic CLI access to the Invoice contracts.

Output generally defaults to JSON.  Use -v for more details, and --no-json to emit a table instead.
"""

log				= logging.getLogger( __package__ )


@click.group()
@click.option('-v', '--verbose', count=True)
@click.option('-q', '--quiet', count=True)
@click.option( '--json/--no-json', default=True, help="Output JSON (the default)")
@click.option( '--rpc', help=f"The JSON-RPC URL of the network (default: INVOICE_RPC_URL, or {RPC_URL})" )
@click.option( '--factory', help="The InvoiceFactory contract address (default: INVOICE_FACTORY_ADDRESS, or the deployed factory)" )
@click.option( '--chain-id', type=int, help="The expected chain ID (default: INVOICE_CHAIN_ID, or the deployed factory's chain)" )
@click.option( '--key', help="Hex private key to sign transactions w/; '-' reads it from stdin (default: INVOICE_PRIVATE_KEY)" )
def cli( verbose, quiet, json, rpc, factory, chain_id, key ):
    cli.verbosity		= verbose - quiet
    log_cfg['level']		= log_level( cli.verbosity )
    logging.basicConfig( **log_cfg )
    if verbose or quiet:
        logging.getLogger().setLevel( log_cfg['level'] )
    cli.json			= json
    cli.rpc			= rpc or os.getenv( 'INVOICE_RPC_URL' ) or RPC_URL
    cli.factory			= factory
    cli.chain_id		= chain_id
    if key == '-':
        key			= input_secure( 'Private key hex: ', secret=True ).strip()
    cli.key			= key or os.getenv( 'INVOICE_PRIVATE_KEY' )
cli.verbosity			= 0  # noqa: E305
cli.json			= False
cli.rpc				= None
cli.factory			= None
cli.chain_id			= None
cli.key				= None


def wallet():
    """The wallet used by all commands; a Web3Wallet on the configured RPC URL."""
    return Web3Wallet( cli.rpc, private_key=cli.key )


def client( **kwds ):
    return InvoiceClient(
        wallet(),
        factory_address		= cli.factory,
        expected_chain_id	= cli.chain_id,
        **kwds
    )


def echo_invoices( invoices ):
    if cli.json:
        click.echo( json.dumps( [ dataclasses.asdict( inv ) for inv in invoices ], indent=4 ))
    else:
        click.echo( invoices_table( invoices ))


def report( invoicing, result ):
    """Surface any network warning, and fail w/ the InvoiceClient's error message."""
    if warning := invoicing.network_warning:
        click.echo( f"Warning: {warning}", err=True )
    if result is None:
        raise click.ClickException( invoicing.error or "Operation failed" )


@click.command( name="list" )
def list_invoices():
    """Connect the wallet and list its invoices."""
    invoicing			= client()
    try:
        result			= asyncio.run( invoicing.connect_and_load() )
    finally:
        invoicing.close()
    report( invoicing, result )
    if cli.verbosity > 0:
        click.echo( f"Account {invoicing.account} on chain {invoicing.session.chain_id}: {len( invoicing.invoices )} invoices", err=True )
    echo_invoices( invoicing.invoices )


@click.command()
@click.option( "--recipient", "recipients", multiple=True, required=True, help="A recipient address (repeat for each recipient)" )
@click.option( "--share", "shares", multiple=True, required=True, help="The percentage share of the corresponding recipient" )
@click.option( "--amount", required=True, help="The total invoice amount, eg. 10.5" )
@click.option( "--description", default="", help="A description of the invoice" )
@click.option( '--check-shares/--no-check-shares', default=False, help=f"Require shares to total {SHARES_TOTAL} before submitting" )
def create( recipients, shares, amount, description, check_shares ):
    """Create an invoice, and list the account's invoices."""
    invoicing			= client( shares_total=SHARES_TOTAL if check_shares else None )

    async def connect_and_submit():
        if await invoicing.connect_and_load() is None:
            return None
        return await invoicing.submit_invoice( InvoiceDraft(
            recipients		= list( recipients ),
            shares		= list( shares ),
            total_amount	= amount,
            description		= description,
        ))
    try:
        result			= asyncio.run( connect_and_submit() )
    finally:
        invoicing.close()
    report( invoicing, result )
    click.echo( f"Transaction: {invoicing.tx_hash}", err=cli.json )
    echo_invoices( invoicing.invoices )


@click.command()
@click.argument( "amount" )
@click.option( '--to-base/--from-base', default=True, help="Convert a decimal amount to base units (the default), or back" )
@click.option( '--decimals', type=int, default=DECIMALS, help=f"The decimal places of the base unit (default: {DECIMALS})" )
def convert( amount, to_base, decimals ):
    """Convert an amount to (or from) its integer base units."""
    try:
        converted		= to_base_units( amount, decimals=decimals ) if to_base else from_base_units( amount, decimals=decimals )
    except InvalidAmountFormat as exc:
        raise click.ClickException( str( exc ))
    click.echo( json.dumps( converted ) if cli.json else converted )


cli.add_command( list_invoices )
cli.add_command( create )
cli.add_command( convert )
