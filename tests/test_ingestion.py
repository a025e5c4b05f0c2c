import os
import unittest
from datetime import date
from unittest import mock
from covidtrend.ingestion.jhu_client import build_jhu_time_series_url, parse_jhu_time_series
from covidtrend.ingestion.owid_client import build_owid_csv_url, parse_owid_csv

JHU_CSV = """Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
,Italy,41.87,12.56,0,2,5
Hubei,China,30.97,112.27,444,444,549
Beijing,China,40.18,116.41,14,22,36
,Germany,51.16,10.45,0,,1
"""

OWID_CSV = """iso_code,continent,location,date,new_cases,new_deaths
DEU,Europe,Germany,2020-03-01,100,1
DEU,Europe,Germany,2020-03-02,,2
DEU,Europe,Germany,2020-03-04,130,3
FRA,Europe,France,2020-03-01,50,0
"""


class TestJHUClient(unittest.TestCase):
    def test_build_url(self):
        url = build_jhu_time_series_url("deaths")
        self.assertTrue(url.endswith("/time_series_covid19_deaths_global.csv"))
        self.assertIn("csse_covid_19_time_series", url)

    def test_build_url_env_override(self):
        with mock.patch.dict(os.environ, {"COVIDTREND_JHU_BASE_URL": "http://mirror.local/ts/"}):
            url = build_jhu_time_series_url("Confirmed")
        self.assertEqual(url, "http://mirror.local/ts/time_series_covid19_confirmed_global.csv")

    def test_unknown_metric(self):
        with self.assertRaises(ValueError):
            build_jhu_time_series_url("hospitalized")

    def test_parse_wide_layout(self):
        out = parse_jhu_time_series(JHU_CSV)
        self.assertEqual(set(out), {"Italy", "China", "Germany"})
        self.assertEqual(out["Italy"], [(date(2020, 1, 22), 0), (date(2020, 1, 23), 2), (date(2020, 1, 24), 5)])
        # one pair per province per day
        self.assertEqual(len(out["China"]), 6)
        jan22 = sum(v for d, v in out["China"] if d == date(2020, 1, 22))
        self.assertEqual(jan22, 458)

    def test_blank_cells_skipped(self):
        out = parse_jhu_time_series(JHU_CSV)
        self.assertEqual([d for d, _ in out["Germany"]], [date(2020, 1, 22), date(2020, 1, 24)])

    def test_missing_country_column(self):
        with self.assertRaises(ValueError):
            parse_jhu_time_series("a,b\n1,2\n")


class TestOWIDClient(unittest.TestCase):
    def test_build_url(self):
        self.assertTrue(build_owid_csv_url().endswith("owid-covid-data.csv"))

    def test_parse_metric_column(self):
        out = parse_owid_csv(OWID_CSV, "new_cases")
        self.assertEqual(out["Germany"], [(date(2020, 3, 1), 100.0), (date(2020, 3, 4), 130.0)])
        self.assertEqual(out["France"], [(date(2020, 3, 1), 50.0)])

    def test_parse_deaths(self):
        out = parse_owid_csv(OWID_CSV, "new_deaths")
        self.assertEqual(len(out["Germany"]), 3)

    def test_missing_column(self):
        with self.assertRaises(ValueError):
            parse_owid_csv(OWID_CSV, "icu_patients")


if __name__ == "__main__":
    unittest.main()
