"""
Shared fixtures for the budget dashboard tests.
"""
import json

import pytest

from core.config import reset_settings
from core.schema import Transaction


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point storage at a temp dir and rebuild settings for every test."""
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "files"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def raw_records():
    """Ledger entries as they appear in the JSON export."""
    return [
        {"jahr": 2024, "gruppe_ebene1": "Verwaltung", "gruppe": "Geschäftsstelle",
         "kontogruppe": "13 - Personal", "sachkonto": "6900100 - Gehälter", "betrag": "1.000,00"},
        {"jahr": 2024, "gruppe_ebene1": "Verwaltung", "gruppe": "Geschäftsstelle",
         "kontogruppe": "2 - Zuwendungen", "sachkonto": "5100000 - Beiträge", "betrag": "-1.500,50"},
        {"Jahr": "2024", "gruppe_ebene1": "Bildung", "Gruppe": "Seminare",
         "Kontogruppe": "13 - Personal", "Sachkonto": "6900200 - Honorare", "Betrag": "250,25"},
        {"jahr": 2024, "gruppe_ebene1": "Bildung", "gruppe": "Seminare",
         "kontogruppe": "9 - Verrechnung", "sachkonto": "9100000 - Umlage", "betrag": "-300,00"},
        {"jahr": 2023, "gruppe_ebene1": "Verwaltung", "gruppe": "Geschäftsstelle",
         "kontogruppe": "13 - Personal", "sachkonto": "6900100 - Gehälter", "betrag": "900,00"},
    ]


@pytest.fixture
def ledger_file(tmp_path, raw_records):
    """Ledger JSON written to disk."""
    path = tmp_path / "haushalt.json"
    path.write_text(json.dumps(raw_records), encoding="utf-8")
    return path


@pytest.fixture
def rows():
    """Normalized transactions covering income, expense and clearing accounts."""
    return [
        Transaction(year="2024", group="A", group_level1="L1", account_group="13 - Personal",
                    account="6900100 - Gehälter", amount=1000.0),
        Transaction(year="2024", group="A", group_level1="L1", account_group="2 - Zuwendungen",
                    account="5100000 - Beiträge", amount=-1500.0),
        Transaction(year="2024", group="B", group_level1="L2", account_group="13 - Personal",
                    account="6900200 - Honorare", amount=250.0),
        Transaction(year="2024", group="B", group_level1="L2", account_group="9 - Verrechnung",
                    account="9100000 - Umlage Ertrag", amount=-300.0),
        Transaction(year="2024", group="B", group_level1="L2", account_group="9 - Verrechnung",
                    account="9200000 - Umlage Aufwand", amount=300.0),
        Transaction(year="2023", group="A", group_level1="L1", account_group="13 - Personal",
                    account="6900100 - Gehälter", amount=900.0),
    ]
