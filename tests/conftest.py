"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fixtures.generate_records import generate_rows  # noqa: E402
from models.records import HolidayRecord, NoveltyRecord, TrainingRecord  # noqa: E402
from services.records import Snapshot, rows_to_records  # noqa: E402


@pytest.fixture
def sample_record():
    """Training record active 1-5 March 2025, dates in both encodings."""
    return TrainingRecord(
        request_date="Date(2025,1,20)",
        coordinator="Laura Rios",
        client="Banco Andino",
        segment="Personas",
        developer="Ana Gomez",
        development_type="NUEVO",
        name="Curso de bienvenida",
        quantity="3",
        material_date="2025-02-25",
        start_date="Date(2025,2,1)",
        end_date="2025-03-05",
        status="En Proceso",
        campaign="Banco Andino",
    )


@pytest.fixture
def sample_records(sample_record):
    """Records spread over 2025 with one per status family."""
    return [
        sample_record,
        TrainingRecord(
            coordinator="Laura Rios",
            client="Banco Andino",
            developer="Carlos Ruiz",
            development_type="ACTUALIZACION",
            name="Actualización de guion",
            start_date="2025-03-03",
            end_date="2025-03-14",
            status="Completado",
            campaign="Banco Andino",
        ),
        TrainingRecord(
            coordinator="Pedro Salas",
            client="Telco Sur",
            developer="Ana Gomez",
            name="Portabilidad",
            start_date="Date(2025,0,1)",
            end_date="Date(2025,11,31)",
            status="Pendiente",
            campaign="Telco Sur",
        ),
        TrainingRecord(
            coordinator="Pedro Salas",
            client="Energía Norte",
            developer="Marta Diaz",
            name="Facturación",
            start_date="2025-05-10",
            end_date="2025-07-15",
            status="Otro",
            campaign="Energia Norte",
        ),
        TrainingRecord(
            developer="Marta Diaz",
            name="Sin fechas",
            status="Pendiente",
            campaign="Energia Norte",
        ),
    ]


@pytest.fixture
def holidays():
    return [
        HolidayRecord(date="Date(2025,2,24)", name="San José"),
        HolidayRecord(date="2025-03-24", name="Duplicado"),
        HolidayRecord(date="not a date", name="Roto"),
        HolidayRecord(date=None, name="Vacío"),
    ]


@pytest.fixture
def novelties():
    return [
        NoveltyRecord(developer="Ana Gomez", start_date="2025-03-03", end_date="2025-03-04", note="Vacaciones"),
        NoveltyRecord(developer="Carlos Ruiz", start_date="Date(2025,2,4)", end_date="Date(2025,2,4)", note="Cita médica"),
        NoveltyRecord(developer="Marta Diaz", start_date=None, end_date="2025-03-04", note="Sin inicio"),
    ]


@pytest.fixture
def snapshot(sample_records, holidays, novelties):
    return Snapshot(
        records=tuple(sample_records),
        holidays=tuple(holidays),
        novelties=tuple(novelties),
        sequence=1,
    )


@pytest.fixture
def generated_records():
    """A few hundred Faker-made rows in the training sheet layout."""
    return rows_to_records(generate_rows(count=300, seed=11), schema="training")
