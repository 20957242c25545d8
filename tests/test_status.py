"""
Derivations: subscription status, renewal window, expiry buckets, loan status,
price and amount parsing, end-date extension.
Run: python -m pytest tests/test_status.py -v
"""
import unittest
from datetime import date

from services.status import (
    clean_amount,
    derive_loan_status,
    derive_subscription_status,
    document_expiry_bucket,
    extend_end_date,
    is_renewal_due,
    monthly_cost,
    parse_price,
    renewal_planned_date,
    serial_number,
)

TODAY = date(2025, 1, 10)


class TestSubscriptionStatus(unittest.TestCase):
    def test_no_markers_is_pending(self):
        self.assertEqual(derive_subscription_status({}), "Pending")
        self.assertEqual(derive_subscription_status({"actual_2": "", "actual_3": None}), "Pending")

    def test_approval_marker(self):
        self.assertEqual(derive_subscription_status({"actual_2": "2025-01-01"}), "Approved")

    def test_rejected_decision(self):
        record = {"actual_2": "2025-01-01"}
        self.assertEqual(derive_subscription_status(record, "Rejected"), "Rejected")
        self.assertEqual(derive_subscription_status(record, "approved"), "Approved")

    def test_payment_wins_over_inconsistent_markers(self):
        """actual_3 without actual_2 still reads as Paid."""
        self.assertEqual(derive_subscription_status({"actual_3": "2025-01-02"}), "Paid")
        self.assertEqual(derive_subscription_status({"actual_2": "x", "actual_3": "y"}, "Rejected"), "Paid")


class TestRenewalWindow(unittest.TestCase):
    def test_boundaries(self):
        self.assertTrue(is_renewal_due(date(2025, 1, 17), TODAY))
        self.assertFalse(is_renewal_due(date(2025, 1, 18), TODAY))

    def test_past_dates_are_due(self):
        self.assertTrue(is_renewal_due(date(2024, 12, 1), TODAY))

    def test_missing_date_not_due(self):
        self.assertFalse(is_renewal_due(None, TODAY))

    def test_custom_window(self):
        self.assertTrue(is_renewal_due(date(2025, 2, 9), TODAY, window_days=30))

    def test_planned_date_falls_back_to_end_date(self):
        self.assertEqual(renewal_planned_date({"planned_1": "2025-02-01", "end_date": "2025-03-01"}), date(2025, 2, 1))
        self.assertEqual(renewal_planned_date({"planned_1": None, "end_date": "2025-03-01"}), date(2025, 3, 1))
        self.assertIsNone(renewal_planned_date({}))


class TestExpiryBucket(unittest.TestCase):
    def test_buckets(self):
        self.assertEqual(document_expiry_bucket(None, TODAY), "Active")
        self.assertEqual(document_expiry_bucket("2025-01-09", TODAY), "Expired")
        self.assertEqual(document_expiry_bucket("2025-01-10", TODAY), "Expiring")
        self.assertEqual(document_expiry_bucket("2025-02-09", TODAY), "Expiring")
        self.assertEqual(document_expiry_bucket("2025-02-10", TODAY), "Active")

    def test_unparseable_date_is_active(self):
        self.assertEqual(document_expiry_bucket("soon", TODAY), "Active")

    def test_day_first_format(self):
        self.assertEqual(document_expiry_bucket("15/01/2025", TODAY), "Expiring")


class TestLoanStatus(unittest.TestCase):
    def test_precedence(self):
        self.assertEqual(derive_loan_status({"finalSettlementStatus": "Yes", "foreclosureStatus": "Approved"}), "Closed")
        self.assertEqual(derive_loan_status({"foreclosureStatus": "Approved"}), "Foreclosure")
        self.assertEqual(derive_loan_status({"foreclosureStatus": "Pending"}), "Active")
        self.assertEqual(derive_loan_status({}), "Active")


class TestMoney(unittest.TestCase):
    def test_parse_price(self):
        self.assertEqual(parse_price("₹12,499"), 12499.0)
        self.assertEqual(parse_price(250), 250.0)
        self.assertEqual(parse_price("free"), 0.0)
        self.assertEqual(parse_price(None), 0.0)
        self.assertEqual(parse_price("1,200.00 INR/yr."), 1200.0)
        self.assertEqual(parse_price("Rs. 500"), 0.5)
        self.assertEqual(parse_price("1.5.2"), 1.5)
        self.assertEqual(parse_price("."), 0.0)

    def test_monthly_cost(self):
        self.assertEqual(monthly_cost("₹1,200", "Yearly"), 100.0)
        self.assertEqual(monthly_cost("300", "Quarterly"), 100.0)
        self.assertEqual(monthly_cost("600", "Half-Yearly"), 100.0)
        self.assertEqual(monthly_cost("600", "6 Months"), 100.0)
        self.assertEqual(monthly_cost("999", "Monthly"), 999.0)
        self.assertEqual(monthly_cost("999", "Weekly"), 999.0)
        self.assertEqual(monthly_cost("1,200.00 INR/yr.", "Yearly"), 100.0)

    def test_clean_amount(self):
        self.assertEqual(clean_amount("₹1,20,000"), 120000.0)
        self.assertEqual(clean_amount(" 25 000 "), 25000.0)
        with self.assertRaises(ValueError):
            clean_amount("lots")


class TestSerialAndDates(unittest.TestCase):
    def test_serial_number(self):
        self.assertEqual(serial_number(7), "SN-007")
        self.assertEqual(serial_number("12"), "SN-012")
        self.assertEqual(serial_number(1234), "SN-1234")
        self.assertEqual(serial_number(3, prefix="RN"), "RN-003")

    def test_extend_end_date(self):
        self.assertEqual(extend_end_date("2025-01-31", "Monthly"), date(2025, 2, 28))
        self.assertEqual(extend_end_date("2025-01-15", "Quarterly"), date(2025, 4, 15))
        self.assertEqual(extend_end_date("2025-01-15", "Half-Yearly"), date(2025, 7, 15))
        self.assertEqual(extend_end_date("2024-02-29", "Yearly"), date(2025, 2, 28))
        self.assertEqual(extend_end_date("2025-01-15", "Whenever"), date(2026, 1, 15))
        self.assertIsNone(extend_end_date(None, "Monthly"))


if __name__ == "__main__":
    unittest.main()
