import unittest
from fastapi.testclient import TestClient
from lumpsum.api.api_run import app, get_store
from lumpsum.utilities.config import SESSION_COOKIE


class TestScheduleAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def _create(self, **overrides):
        payload = {"rate": 500, "start_month": "2025-12", "duration": 2}
        payload.update(overrides)
        resp = self.client.post('/api/schedule', json=payload)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_create_schedule(self):
        data = self._create()
        self.assertIn('session_id', data)
        schedule = data['schedule']
        self.assertEqual(schedule['totals'], {'working_days': 41, 'lump_sum': 20500.0})
        self.assertEqual([m['month_label'] for m in schedule['months']], ['December 2025', 'January 2026'])
        self.assertEqual(schedule['months'][0]['milestone_date'], '31.12.2025')

    def test_resubmission_replaces_schedule(self):
        sid = self._create()['session_id']
        data = self._create(session_id=sid, duration=1, start_month='2025-08')
        self.assertEqual(data['session_id'], sid)
        resp = self.client.get(f'/api/schedule/{sid}')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['duration'], 1)
        self.assertEqual(resp.json()['months'][0]['working_days'], 20)

    def test_invalid_requests(self):
        for bad in ({"start_month": "2025-13"}, {"rate": 0}, {"duration": 0}, {"start_month": "March"}):
            payload = {"rate": 500, "start_month": "2025-12", "duration": 2}
            payload.update(bad)
            resp = self.client.post('/api/schedule', json=payload)
            self.assertEqual(resp.status_code, 422, bad)

    def test_schedule_beyond_supported_range(self):
        resp = self.client.post('/api/schedule', json={"rate": 500, "start_month": "9999-12", "duration": 2})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_session(self):
        self.assertEqual(self.client.get('/api/schedule/nope').status_code, 404)
        self.assertEqual(self.client.get('/api/schedule/nope/export.csv').status_code, 404)

    def test_edit_and_export_csv(self):
        sid = self._create()['session_id']
        resp = self.client.put(f'/api/schedule/{sid}/months/0/deliverables', json={"text": "Design, draft\nv1"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['deliverables'], "Design, draft\nv1")
        resp = self.client.put(f'/api/schedule/{sid}/months/1/work-plan/2',
                               json={"activity": "supplier", "text": "Implementation"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['work_plan']['2']['supplier'], "Implementation")

        resp = self.client.get(f'/api/schedule/{sid}/export.csv')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers['content-type'].startswith('text/csv'))
        self.assertIn('attachment', resp.headers['content-disposition'])
        body = resp.text
        self.assertIn('December 2025,31.12.2025,21,10500.00,Design; draft v1', body)
        self.assertIn('TOTAL,,41,20500.00,', body)
        self.assertIn(',Implementation,', body)

    def test_edit_errors(self):
        sid = self._create()['session_id']
        self.assertEqual(self.client.put(f'/api/schedule/{sid}/months/7/deliverables',
                                         json={"text": "x"}).status_code, 404)
        self.assertEqual(self.client.put(f'/api/schedule/{sid}/months/0/work-plan/42',
                                         json={"activity": "client", "text": "x"}).status_code, 400)
        self.assertEqual(self.client.put(f'/api/schedule/{sid}/months/0/work-plan/1',
                                         json={"activity": "vendor", "text": "x"}).status_code, 422)

    def test_export_pdf(self):
        sid = self._create()['session_id']
        resp = self.client.get(f'/api/schedule/{sid}/export.pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers['content-type'], 'application/pdf')
        self.assertTrue(resp.content.startswith(b'%PDF'))

    def test_drop_schedule(self):
        sid = self._create()['session_id']
        self.assertEqual(self.client.delete(f'/api/schedule/{sid}').status_code, 200)
        self.assertNotIn(sid, get_store())


class TestCalendarAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_holidays(self):
        data = self.client.get('/api/holidays/2025').json()
        self.assertEqual(data['count'], 9)
        self.assertIn({"date": "2025-08-01", "name": "Swiss National Day", "weekday": "Friday"}, data['holidays'])

    def test_easter(self):
        data = self.client.get('/api/easter/2024').json()
        self.assertEqual(data['easter_sunday'], '2024-03-31')
        self.assertEqual(data['label'], '31.03.2024')

    def test_working_days(self):
        data = self.client.get('/api/working-days/2025/8').json()
        self.assertEqual(data['working_days'], 20)
        self.assertEqual(data['month_label'], 'August 2025')
        self.assertEqual(data['milestone_date'], '29.08.2025')

    def test_out_of_range(self):
        self.assertEqual(self.client.get('/api/working-days/2025/0').status_code, 400)
        self.assertEqual(self.client.get('/api/working-days/2025/13').status_code, 400)
        self.assertEqual(self.client.get('/api/holidays/1000').status_code, 400)


class TestHtmlPages(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_form_page(self):
        resp = self.client.get('/')
        self.assertEqual(resp.status_code, 200)
        self.assertIn('Swiss Lump-Sum Planner', resp.text)
        self.assertIn('name="start_month"', resp.text)

    def test_calculate_and_edit_month(self):
        resp = self.client.post('/calculate', data={"rate": "500", "start_month": "2025-12", "duration": "2"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('December 2025', resp.text)
        self.assertIn('CHF 20,500.00', resp.text)
        sid = self.client.cookies.get(SESSION_COOKIE)
        self.assertIn(sid, get_store())

        resp = self.client.post('/months/0', data={"deliverables": "Architecture review",
                                                   "supplier_1": "Workshop", "client_1": "Access rights"})
        self.assertEqual(resp.status_code, 200)
        result = get_store().get(sid).results[0]
        self.assertEqual(result.deliverables, "Architecture review")
        self.assertEqual(result.work_plan[1], {"supplier": "Workshop", "client": "Access rights"})
        self.assertIn('Architecture review', resp.text)

    def test_invalid_form_input(self):
        resp = self.client.post('/calculate', data={"rate": "-1", "start_month": "2025-12", "duration": "2"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('Please enter a positive rate', resp.text)

    def test_edit_without_session(self):
        resp = self.client.post('/months/0', data={"deliverables": "x"})
        self.assertEqual(resp.status_code, 404)


if __name__ == '__main__':
    unittest.main()
