"""Ledger Client Meta information.
   Ledger Client wraps keys with passwords and attaches proofs
   to ledger operations before submission.
"""
__title__ = 'ledger_client'
__description__ = (
   'Password-based key wrapping and proof attachment '
   'for ledger operations.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2018 Digital Bazaar, Inc.'
__author__ = 'Digital Bazaar, Inc.'
