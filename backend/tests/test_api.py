import json
import unittest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
import sys
import os

# Add backend to path so we can import main
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from routes.http import get_intake_services
from intake_agent.services import AnalysisTransportError, InMemoryIntakeStore

CHEST_PAIN_ANALYSIS = {
    "briefSummary": "Patient reports severe chest pain spreading to the left arm.",
    "extractedSymptoms": ["chest pain"],
    "possibleCauses": ["cardiac event"],
    "redFlags": ["radiating pain"],
    "riskScore": 92,
    "urgency": "Emergency",
}


class TestIntakeAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

        # Mock services to avoid calling the hosted model
        self.mock_analysis = MagicMock()
        self.mock_analysis.generate.return_value = json.dumps(CHEST_PAIN_ANALYSIS)
        self.store = InMemoryIntakeStore()

        self.mock_services = {
            "analysis": self.mock_analysis,
            "store": self.store,
        }

        # Override dependency
        app.dependency_overrides[get_intake_services] = lambda: self.mock_services

    def tearDown(self):
        app.dependency_overrides = {}

    def test_read_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "online", "system": "Clinexa Intake"})

    def test_intake_success_envelope(self):
        symptoms = "severe chest pain radiating to left arm"
        response = self.client.post("/intake", json={"symptoms": symptoms})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["state"], "succeeded")
        self.assertIsNone(body["error"])
        self.assertEqual(body["data"]["analysis"], CHEST_PAIN_ANALYSIS)
        self.assertEqual(body["data"]["intake"]["rawSymptoms"], symptoms)
        self.assertEqual(len(self.store), 1)
        self.mock_analysis.generate.assert_called_once()

    def test_blank_intake_is_inert(self):
        response = self.client.post("/intake", json={"symptoms": "   \n\t "})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"success": False, "state": "idle", "data": {}, "error": None},
        )
        self.assertEqual(len(self.store), 0)
        self.mock_analysis.generate.assert_not_called()

    def test_intake_transport_failure_hides_provider_detail(self):
        self.mock_analysis.generate.side_effect = AnalysisTransportError(
            "503 upstream quota exhausted for project secret-123"
        )
        response = self.client.post("/intake", json={"symptoms": "headache"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["state"], "failed")
        self.assertEqual(body["error"]["code"], "ANALYSIS_TRANSPORT_FAILED")
        self.assertTrue(body["error"]["message"])
        self.assertNotIn("secret-123", json.dumps(body))
        self.assertEqual(len(self.store), 0)

    def test_intake_invalid_payload_mapping(self):
        self.mock_analysis.generate.return_value = "not json"
        response = self.client.post("/intake", json={"symptoms": "mild cough"})
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "ANALYSIS_INVALID_PAYLOAD")
        self.assertEqual(len(self.store), 0)

    def test_chest_pain_scenario_reaches_dashboard(self):
        self.client.post(
            "/intake", json={"symptoms": "severe chest pain radiating to left arm"}
        )
        self.assertEqual(len(self.store), 1)
        intake_id = self.store.records[0].id

        dashboard = self.client.get("/dashboard").json()
        self.assertEqual(dashboard["counters"]["critical"], 1)
        self.assertEqual(dashboard["counters"]["high_priority"], 0)
        self.assertEqual(dashboard["counters"]["total"], 1)

        detail = self.client.get(f"/dashboard/intakes/{intake_id}").json()
        self.assertEqual(detail["intake"]["summary"]["riskScore"], 92)

    def test_dashboard_search_without_match(self):
        self.client.post("/intake", json={"symptoms": "chest pain"})
        response = self.client.get(
            "/dashboard", params={"q": "zzz-no-match", "selected": "UNKNOWN"}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["intakes"], [])
        self.assertIsNone(body["selected"])
        self.assertEqual(body["counters"]["total"], 1)
        self.assertEqual(body["counters"]["critical"], 1)

    def test_dashboard_lists_most_recent_first(self):
        self.client.post("/intake", json={"symptoms": "first"})
        self.client.post("/intake", json={"symptoms": "second"})
        body = self.client.get("/dashboard").json()
        self.assertEqual(
            [intake["rawSymptoms"] for intake in body["intakes"]],
            ["second", "first"],
        )

    def test_unknown_intake_detail_is_placeholder(self):
        response = self.client.get("/dashboard/intakes/NOPE")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"intake": None})


if __name__ == '__main__':
    unittest.main()
