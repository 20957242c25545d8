import unittest

from schemas.document import DocumentEntry, DocumentUpdate
from services.mappers import (
    document_entry_payload,
    document_update_payload,
    file_name_from_url,
    latest_approvals,
    map_document,
    map_loan,
    map_master,
    map_subscription,
    map_user,
    payment_stage,
    transform_payment,
)


class TestDocumentMapping(unittest.TestCase):
    def test_backend_document_to_display(self):
        doc = map_document(
            {
                "document_id": 7,
                "document_name": "Trade License",
                "document_type": "License",
                "category": "Company",
                "person_name": None,
                "company_department": "Acme",
                "need_renewal": "yes",
                "renewal_date": "2025-06-30",
                "image": "https://bucket.s3.amazonaws.com/docs/trade-license.pdf",
                "created_at": "2024-10-10T08:00:00Z",
            }
        )
        self.assertEqual(doc["id"], "7")
        self.assertEqual(doc["sn"], "SN-007")
        self.assertEqual(doc["companyName"], "Acme")
        self.assertTrue(doc["needsRenewal"])
        self.assertEqual(doc["file"], "trade-license.pdf")
        self.assertEqual(doc["date"], "2024-10-10")
        self.assertEqual(doc["status"], "Active")

    def test_need_renewal_is_exact_yes(self):
        self.assertFalse(map_document({"document_id": 1, "need_renewal": "no"})["needsRenewal"])
        self.assertFalse(map_document({"document_id": 1})["needsRenewal"])

    def test_file_name_from_url(self):
        self.assertIsNone(file_name_from_url(None))
        self.assertEqual(file_name_from_url("data:application/pdf;base64,AAAA"), "document")
        self.assertEqual(file_name_from_url("https://x/y/z.png"), "z.png")

    def test_entry_payload(self):
        entry = DocumentEntry(
            documentName="PAN",
            documentType="Identity",
            category="Director",
            companyName="Ravi",
            needsRenewal=False,
            renewalDate="2025-01-01",
        )
        payload = document_entry_payload(entry)
        self.assertEqual(payload["person_name"], "Ravi")
        self.assertIsNone(payload["company_department"])
        self.assertEqual(payload["need_renewal"], "no")
        self.assertIsNone(payload["renewal_date"])

    def test_update_payload_only_changed_fields(self):
        payload = document_update_payload(DocumentUpdate(documentName="New name"))
        self.assertEqual(payload, {"document_name": "New name"})

    def test_update_payload_turning_renewal_off_clears_date(self):
        payload = document_update_payload(DocumentUpdate(needsRenewal=False, renewalDate="2025-01-01"))
        self.assertEqual(payload["need_renewal"], "no")
        self.assertIsNone(payload["renewal_date"])


class TestSubscriptionMapping(unittest.TestCase):
    def test_status_joined_with_approval_history(self):
        history = [
            {"subscription_no": "SUB-1", "approval": "Approved"},
            {"subscription_no": "SUB-1", "approval": "Rejected"},
            {"subscription_no": "SUB-2", "approval": ""},
        ]
        decisions = latest_approvals(history)
        self.assertEqual(decisions, {"SUB-1": "Rejected"})
        sub = map_subscription({"id": 3, "subscription_no": "SUB-1", "actual_2": "2025-01-01"}, decisions["SUB-1"])
        self.assertEqual(sub["status"], "Rejected")
        self.assertEqual(sub["sn"], "SN-003")

    def test_latest_decision_by_requested_on(self):
        # Newest first, as some backends return it
        history = [
            {"id": 7, "subscription_no": "SUB-1", "approval": "Rejected", "requested_on": "2025-02-01T09:00:00"},
            {"id": 9, "subscription_no": "SUB-1", "approval": "Approved", "requested_on": "2025-01-15T09:00:00"},
        ]
        self.assertEqual(latest_approvals(history), {"SUB-1": "Rejected"})

    def test_latest_decision_by_id_without_timestamps(self):
        history = [
            {"id": 2, "subscription_no": "SUB-1", "approval": "Approved"},
            {"id": 1, "subscription_no": "SUB-1", "approval": "Rejected"},
        ]
        self.assertEqual(latest_approvals(history), {"SUB-1": "Approved"})

    def test_requested_date_is_date_part(self):
        sub = map_subscription({"id": 1, "timestamp": "2025-01-05T10:00:00Z"})
        self.assertEqual(sub["requestedDate"], "2025-01-05")
        self.assertEqual(sub["status"], "Pending")


class TestLoanMapping(unittest.TestCase):
    LOAN = {
        "id": 4,
        "loan_name": "Machinery",
        "bank_name": "HDFC",
        "amount": 100000,
        "emi": 5000,
        "loan_start_date": "2023-01-01T00:00:00Z",
        "loan_end_date": "2025-01-01",
    }

    def test_plain_loan_is_active(self):
        loan = map_loan(self.LOAN)
        self.assertEqual(loan["sn"], "SN-004")
        self.assertEqual(loan["startDate"], "2023-01-01")
        self.assertIsNone(loan["foreclosureStatus"])
        self.assertEqual(loan["loanStatus"], "Active")

    def test_foreclosure_request_without_status_reads_pending(self):
        loan = map_loan(self.LOAN, foreclosure={"serial_no": "SN-004", "request_date": "2025-01-02", "requester_name": "Admin"})
        self.assertEqual(loan["foreclosureStatus"], "Pending")
        self.assertEqual(loan["requestDate"], "2025-01-02")

    def test_noc_record_completes_chain(self):
        loan = map_loan(self.LOAN, noc={"serial_no": "SN-004", "collect_noc": True, "closure_request_date": "2025-01-03"})
        self.assertEqual(loan["documentStatus"], "Yes")
        self.assertEqual(loan["collectNocStatus"], "Yes")
        self.assertEqual(loan["closerRequestDate"], "2025-01-03")

    def test_final_settlement_closes(self):
        loan = map_loan({**self.LOAN, "final_settlement_status": "yes", "foreclosure_status": "Approved"})
        self.assertEqual(loan["loanStatus"], "Closed")


class TestMasterAndUsers(unittest.TestCase):
    def test_master(self):
        rec = map_master({"id": 2, "company_name": "Acme", "document_type": "GST", "category": "Company"})
        self.assertEqual(rec, {"id": "2", "companyName": "Acme", "documentType": "GST", "category": "Company", "renewalFilter": False})

    def test_user_role_normalised(self):
        self.assertEqual(map_user({"username": "a", "role": "admin"})["role"], "admin")
        user = map_user({"id": "u1", "username": "bob", "role": "user", "systemAccess": ["Document"]})
        self.assertEqual(user["role"], "employee")
        self.assertEqual(user["systemAccess"], ["Document"])


class TestPaymentMapping(unittest.TestCase):
    def test_either_casing(self):
        snake = transform_payment({"id": 1, "unique_no": "P-1", "fms_name": "Ops", "pay_to": "Vendor", "amount": "150.5"})
        camel = transform_payment({"id": 1, "uniqueNo": "P-1", "fmsName": "Ops", "payTo": "Vendor", "amount": 150.5})
        for out in (snake, camel):
            self.assertEqual(out["uniqueNo"], "P-1")
            self.assertEqual(out["payTo"], "Vendor")
            self.assertEqual(out["amount"], 150.5)
            self.assertEqual(out["status"], "Pending")
            self.assertEqual(out["stage"], "Approval")

    def test_stage_from_markers(self):
        self.assertEqual(payment_stage({"actual1": "x"}), "Make Payment")
        self.assertEqual(payment_stage({"actual1": "x", "actual2": "y"}), "Tally Entry")
        self.assertEqual(payment_stage({"actual3": "z"}), "Completed")

    def test_bad_amount_is_zero(self):
        self.assertEqual(transform_payment({"amount": "n/a"})["amount"], 0.0)


if __name__ == "__main__":
    unittest.main()
