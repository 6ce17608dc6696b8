import os

from setuptools import setup

#
# All platforms
#
HERE				= os.path.dirname( os.path.abspath( __file__ ))


def requirements( name ):
    """Remove whitespace, elide blank lines and comments"""
    return list(
        ''.join( r.split() )
        for r in open( os.path.join( HERE, name )).readlines()
        if r.strip() and not r.strip().startswith( '#' )
    )


install_requires		= requirements( "requirements.txt" )
tests_require			= requirements( "requirements-tests.txt" )

# Since setuptools is retiring tests_require, add it as an option
extras_require			= {
    'tests':			tests_require,
}

# Must work if setup.py is run in the source distribution context, or from
# within the packaged distribution directory.
__version__			= None
try:
    exec( open( os.path.join( HERE, 'chaininvoice/version.py' ), 'r' ).read() )
except FileNotFoundError:
    exec( open( os.path.join( HERE, 'version.py' ), 'r' ).read() )

console_scripts			= [
    'chaininvoice-cli	= chaininvoice.cli:cli',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

package_dir			= {
    "chaininvoice":		"./chaininvoice",
    "chaininvoice.cli":		"./chaininvoice/cli",
}

long_description_content_type	= 'text/markdown'
long_description		= """\
Issue and track invoices held in Ethereum Smart Contracts.

An InvoiceFactory contract creates an Invoice contract for each bill:
the recipients who share in the payment (and each one's percentage
share), the total amount due, and a description.  The [python-chaininvoice]
project is the client side of these contracts: it connects to a wallet,
creates new Invoices from an editable draft, and lists all of the
Invoices an account has created, along with their payment status.

Amounts are entered and displayed as decimal numbers (eg. "10.5"), and
are converted exactly to and from the 18-decimal integer base units
used on-chain; no amount is ever rounded.

All the Invoices of an account are read concurrently.  An Invoice which
cannot be read (or whose details are malformed) is simply omitted from
the listing, instead of failing it.

## Listing Invoices on the Command Line

    $ chaininvoice-cli --key - --no-json list
    Private key hex:
    | Invoice     | Description   |   Amount | Recipients               | Status   |   Paid |
    |-------------+---------------+----------+--------------------------+----------+--------|
    | 0x5f1c...   | rent          |     10.5 | 0xB9a1... (60%), ...     | Pending  |      0 |

## Creating an Invoice

    $ chaininvoice-cli --key - create --recipient 0xB9a1... --share 60 \\
        --recipient 0x4c2E... --share 40 --amount 10.5 --description rent

## Converting Amounts

    $ chaininvoice-cli convert 10.5
    "10500000000000000000"
    $ chaininvoice-cli convert --from-base 10500000000000000000
    "10.5"

[python-chaininvoice] <https://github.com/pjkundert/python-chaininvoice.git>
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Topic :: Office/Business :: Financial",
]
project_urls			= {
    "Bug Tracker": "https://github.com/pjkundert/python-chaininvoice/issues",
}

setup(
    name			= "chaininvoice",
    version			= __version__,
    install_requires		= install_requires,
    tests_require		= tests_require,
    extras_require		= extras_require,
    packages			= package_dir.keys(),
    package_dir			= package_dir,
    include_package_data	= True,
    zip_safe			= True,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@dominionrnd.com",
    project_urls		= project_urls,
    description			= "Create and track invoices held in Ethereum Smart Contracts",
    long_description		= long_description,
    long_description_content_type = long_description_content_type,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "Ethereum invoice Smart Contract web3 payment",
    url				= "https://github.com/pjkundert/python-chaininvoice",
    classifiers			= classifiers,
    python_requires		= ">=3.9",
)
