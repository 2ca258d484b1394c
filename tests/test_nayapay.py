from parsers.nayapay import (
    build_description,
    extract_amount,
    group_blocks,
    parse_block,
    parse_text,
    split_sections,
)


def test_full_statement(nayapay_text):
    txns = parse_text(nayapay_text)
    assert [t.date for t in txns] == ["2024-03-05", "2024-03-06", "2024-03-07"]

    received, sent, paid = txns
    assert received.credit == 2000.0 and received.debit == 0
    assert received.description == "Received from Ali Khan"
    assert received.original_date == "05 Mar 2024"

    # fee is added on top of the outgoing amount
    assert sent.debit == 510.0 and sent.credit == 0
    assert sent.description == "Sent to Sara Ahmed"

    assert paid.debit == 1250.0
    assert paid.description == "Foodpanda"


def test_fee_increases_the_debit():
    block = ["12 Apr 2024", "Money sent to BILAL", "Fees and Government Taxes Rs. 10", "-Rs. 500"]
    t = parse_block(block)
    assert t.debit == 510.0
    assert t.credit == 0


def test_fee_is_ignored_for_incoming_money():
    block = ["12 Apr 2024", "Fees and Government Taxes Rs. 10", "Rs. 500"]
    t = parse_block(block)
    assert t.credit == 500.0 and t.debit == 0


def test_block_without_date_or_amount_is_dropped():
    assert parse_block(["Money sent to BILAL", "-Rs. 500"]) is None
    assert parse_block(["12 Apr 2024", "Money sent to BILAL", "Rs. 0"]) is None


def test_sections_are_bounded_by_header_and_footer():
    text = (
        "preamble line\n"
        "TIME TYPE DESCRIPTION AMOUNT BALANCE\n"
        "a\nb\n"
        "CARRIED FORWARD\n"
        "between pages\n"
        "TIME TYPE DESCRIPTION AMOUNT BALANCE\n"
        "c\n"
        "Call us (021) 111-222-729\n"
        "trailer\n"
    )
    assert split_sections(text) == [["a", "b"], ["c"]]


def test_blocks_close_on_amount_lines():
    lines = ["5 Mar 2024", "x", "-Rs. 10", "6 Mar 2024", "y", "Rs. 5Rs. 15", "dangling"]
    assert group_blocks(lines) == [
        ["5 Mar 2024", "x", "-Rs. 10"],
        ["6 Mar 2024", "y", "Rs. 5Rs. 15"],
        ["dangling"],
    ]


def test_fee_line_does_not_close_a_block():
    lines = ["5 Mar 2024", "Fees and Government Taxes Rs. 10", "-Rs. 500"]
    assert group_blocks(lines) == [lines]


def test_runaway_blocks_are_capped():
    lines = [f"line {i}" for i in range(45)]
    blocks = group_blocks(lines)
    assert [len(b) for b in blocks] == [40, 5]
    assert [len(b) for b in group_blocks(lines, max_block_lines=10)] == [10, 10, 10, 10, 5]


def test_sign_comes_from_the_amount_marker():
    assert extract_amount(["-Rs. 1,500.50Rs. 100"]) == -1500.5
    assert extract_amount(["+Rs. 20"]) == 20.0
    assert extract_amount(["nothing"]) == 0.0


def test_structural_lines_stay_out_of_the_description():
    lines = [
        "5 Mar 2024",
        "10:15 AM",
        "IBFT Out",
        "Outgoing fund transfer to Zain Ali",
        "Transaction ID 0a1b2c",
        "Bank Alfalah-9876",
        "-Rs. 1,000Rs. 4,000",
    ]
    assert build_description(lines) == "Outgoing fund transfer to Zain Ali"
    assert parse_block(lines).description == "Transfer to Zain Ali"


def test_single_row_layout():
    # columns of one transaction reconstructed onto a single line
    line = "05 Mar 2024 10:15 AM Raast Out Money sent to ALI KHAN -Rs. 500Rs. 12,000"
    t = parse_block([line])
    assert t.debit == 500.0
    assert t.description == "Sent to Ali Khan"


def test_trailing_fee_line_stays_out_of_the_next_transaction():
    section = [
        "05 Mar 2024",
        "Money sent to ALI",
        "-Rs. 500Rs. 1,000",
        "Fees and Government Taxes Rs. 10",
        "06 Mar 2024",
        "Money sent to SARA",
        "-Rs. 200Rs. 790",
    ]
    assert group_blocks(section)[1] == ["Fees and Government Taxes Rs. 10"]

    text = "TIME TYPE DESCRIPTION AMOUNT BALANCE\n" + "\n".join(section) + "\nCARRIED FORWARD\n"
    assert [t.debit for t in parse_text(text)] == [500.0, 200.0]
