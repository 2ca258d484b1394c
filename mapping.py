from classes import BankDialect

from parsers.nayapay import detect as detect_nayapay, parse_text as nayapay_parser
from parsers.hbl import detect as detect_hbl, parse_text as hbl_parser


# Evaluation order is priority order: the first dialect whose detector fires wins.
# To add a bank, write parsers/<bank>.py with detect()/parse_text() and append it here.
BANK_DIALECTS = [
    BankDialect(id="nayapay", display_name="NayaPay", detect=detect_nayapay, parse=nayapay_parser),
    BankDialect(id="hbl", display_name="HBL (Habib Bank Limited)", detect=detect_hbl, parse=hbl_parser),
]
