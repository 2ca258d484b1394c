
# --- Detect bank provider ---
# Indicators are matched as plain substrings (case-sensitive OR case-insensitive).
# Order inside a list is irrelevant; the threshold is the minimum number of hits.
NAYAPAY_INDICATORS = [
    # one entry per word: spellings differing only in case would each score on a single mention
    "NayaPay",
    "(021) 111-222-729",
    "www.nayapay.com",
    "support@nayapay.com",
    "TIME TYPE DESCRIPTION",
    "AMOUNT BALANCE",
]
NAYAPAY_MIN_HITS = 2

HBL_INDICATORS = [
    "HBL Mobile",
    "Habib Bank",
    "Account Activity generated through HBL",
    "IBAN: PK",
    "Transaction\n Date",
    "Value Date",
    "Account Number",
    "CNIC Number",
]
HBL_MIN_HITS = 3


# --- HBL ---
# Lower-cased substrings that mark money coming in
HBL_CREDIT_KEYWORDS = (" fr ", " from ", "transfer fr", "received")
HBL_SECTION_END_MARKERS = ("Closing Balance", "Statement Summary", "End of Statement")


# --- NayaPay ---
NAYAPAY_SUPPORT_PHONE = "(021) 111-222-729"
NAYAPAY_CARRIED_FORWARD = "CARRIED FORWARD"


# --- Currency markers stripped from descriptions ---
CURRENCY_CODES = {"Rs", "PKR", "USD", "EUR", "GBP", "AED"}
