import unittest

from schemas.user import CurrentUser
from services.views import (
    DOCUMENT_SEARCH_FIELDS,
    approval_pending,
    distinct_values,
    drop_from_selection,
    filter_items,
    group_counts,
    noc_done,
    noc_pending,
    split_by,
    visible_to,
)

DOCS = [
    {"id": "1", "sn": "SN-001", "documentName": "GST Certificate", "companyName": "Acme", "category": "Company"},
    {"id": "2", "sn": "SN-002", "documentName": "PAN Card", "companyName": "ravi", "category": "Director"},
    {"id": "3", "sn": "SN-003", "documentName": "Factory License", "companyName": "Acme", "category": "Company"},
]


class TestFiltering(unittest.TestCase):
    def test_search_is_case_insensitive_substring(self):
        items = filter_items(DOCS, "acme", DOCUMENT_SEARCH_FIELDS)
        self.assertEqual([d["id"] for d in items], ["1", "3"])
        self.assertEqual(len(filter_items(DOCS, "sn-002", DOCUMENT_SEARCH_FIELDS)), 1)

    def test_empty_search_keeps_everything(self):
        self.assertEqual(len(filter_items(DOCS, "", DOCUMENT_SEARCH_FIELDS)), 3)

    def test_dropdown_filter(self):
        items = filter_items(DOCS, None, DOCUMENT_SEARCH_FIELDS, category="Director")
        self.assertEqual([d["id"] for d in items], ["2"])
        self.assertEqual(len(filter_items(DOCS, None, DOCUMENT_SEARCH_FIELDS, category=None)), 3)

    def test_distinct_values_sorted(self):
        self.assertEqual(distinct_values(DOCS, "category"), ["Company", "Director"])

    def test_drop_from_selection(self):
        self.assertEqual(drop_from_selection(["1", "2", "3"], "2"), ["1", "3"])
        self.assertEqual(drop_from_selection(["1"], "9"), ["1"])


class TestVisibility(unittest.TestCase):
    def test_admin_sees_all(self):
        admin = CurrentUser(id="admin", username="admin", role="admin")
        self.assertTrue(all(visible_to(admin, d) for d in DOCS))

    def test_employee_sees_own(self):
        ravi = CurrentUser(id="ravi", username="ravi", role="employee")
        self.assertEqual([d["id"] for d in DOCS if visible_to(ravi, d)], ["2"])


class TestStages(unittest.TestCase):
    def test_split_pending_history(self):
        subs = [{"status": "Pending"}, {"status": "Approved"}, {"status": None}, {"status": "Paid"}]
        pending, history = split_by(subs, approval_pending)
        self.assertEqual(len(pending), 2)
        self.assertEqual(len(history), 2)

    def test_noc_stages(self):
        self.assertTrue(noc_pending({"documentStatus": "Yes", "collectNocStatus": None}))
        self.assertFalse(noc_pending({"documentStatus": None}))
        self.assertTrue(noc_done({"collectNocStatus": "No"}))
        self.assertFalse(noc_done({}))

    def test_group_counts_order(self):
        counts = group_counts(DOCS + [{"category": None}], "category", "Uncategorized")
        self.assertEqual(counts[0], {"label": "Company", "count": 2})
        self.assertEqual([c["label"] for c in counts[1:]], ["Director", "Uncategorized"])


if __name__ == "__main__":
    unittest.main()
