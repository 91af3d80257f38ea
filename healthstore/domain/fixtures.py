"""
Canonical demo fixtures.

Every factory is pure: the same arguments always produce the same records,
with fixed ids and fixed timestamps, so seeding is reproducible byte for byte.
Records are in the persisted camelCase form.
"""

from collections.abc import Sequence
from typing import Any

DEMO_OWNER_ID = "demo-patient-1"
FIXTURE_DATE = "2024-01-15"

Record = dict[str, Any]


def _stamped(record: Record, created_at: str = "2024-01-01T00:00:00+00:00") -> Record:
    return {**record, "createdAt": created_at, "updatedAt": created_at}


def _member_at(family_member_ids: Sequence[str], position: int) -> str | None:
    return family_member_ids[position] if position < len(family_member_ids) else None


def family_members(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    members = [
        {
            "name": "Priya Sharma",
            "relationship": "Spouse",
            "age": 42,
            "gender": "Female",
            "bloodType": "O+",
            "allergies": ["Penicillin", "Dairy"],
            "medicalConditions": ["Hypertension", "Diabetes Type 2"],
            "emergencyContact": True,
        },
        {
            "name": "Arjun Sharma",
            "relationship": "Son",
            "age": 19,
            "gender": "Male",
            "bloodType": "A+",
            "allergies": ["Peanuts", "Shellfish"],
            "medicalConditions": ["Asthma", "Seasonal Allergies"],
            "emergencyContact": False,
        },
        {
            "name": "Ananya Sharma",
            "relationship": "Daughter",
            "age": 16,
            "gender": "Female",
            "bloodType": "B+",
            "allergies": ["Dust Mites"],
            "medicalConditions": ["Eczema"],
            "emergencyContact": False,
        },
        {
            "name": "Rajesh Sharma",
            "relationship": "Father",
            "age": 68,
            "gender": "Male",
            "bloodType": "AB+",
            "allergies": ["Sulfa Drugs"],
            "medicalConditions": ["Hypertension", "Arthritis"],
            "emergencyContact": True,
        },
    ]
    return [
        _stamped({**member, "id": f"family_{index}", "userId": owner_id})
        for index, member in enumerate(members, start=1)
    ]


def medications(
    owner_id: str = DEMO_OWNER_ID, family_member_ids: Sequence[str] = ()
) -> list[Record]:
    """The first medication belongs to the owner, the rest to family members in order."""
    base = [
        ("Lisinopril", "1 tablet", "10mg", "tablet", "daily", ["08:00"], "Take with food in the morning", ["dizziness", "dry cough"]),
        ("Metformin", "1 tablet", "500mg", "tablet", "twiceDaily", ["08:00", "20:00"], "Take with meals to reduce stomach upset", ["nausea", "diarrhea"]),
        ("Vitamin D", "1 capsule", "1000IU", "capsule", "daily", ["12:00"], "Take with meal for better absorption", []),
        ("Albuterol", "2 puffs", "90mcg", "inhaler", "asNeeded", ["06:00", "14:00", "22:00"], "Use as needed for shortness of breath", ["tremors"]),
        ("Aspirin", "1 tablet", "81mg", "tablet", "daily", ["07:00"], "Take in the morning with water", ["stomach upset", "bruising"]),
    ]
    records = []
    for index, (name, dosage, strength, form, frequency, times, instructions, side_effects) in enumerate(base):
        records.append(
            _stamped(
                {
                    "id": f"med_{index + 1}",
                    "userId": owner_id,
                    "familyMemberId": _member_at(family_member_ids, index - 1) if index else None,
                    "name": name,
                    "medicineName": name,
                    "dosage": dosage,
                    "doseStrength": strength,
                    "doseForm": form,
                    "frequency": frequency,
                    "times": times,
                    "startDate": "2024-01-01",
                    "endDate": "2024-12-31",
                    "instructions": instructions,
                    "sideEffects": side_effects,
                    "status": "active",
                }
            )
        )
    return records


def dose_records(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    doses = [
        ("med_1", "Lisinopril", "1 tablet", "08:00", "taken", f"{FIXTURE_DATE}T08:05:00+00:00"),
        ("med_2", "Metformin", "1 tablet", "08:00", "taken", f"{FIXTURE_DATE}T08:10:00+00:00"),
        ("med_3", "Vitamin D", "1 capsule", "12:00", "missed", None),
        ("med_4", "Albuterol", "2 puffs", "14:00", "skipped", None),
        ("med_2", "Metformin", "1 tablet", "20:00", "pending", None),
    ]
    records = []
    for index, (medication_id, name, dosage, time, status, taken_at) in enumerate(doses, start=1):
        record = {
            "id": f"dose_{index}",
            "userId": owner_id,
            "medicationId": medication_id,
            "medicationName": name,
            "dosage": dosage,
            "scheduledTime": f"{FIXTURE_DATE}T{time}:00+00:00",
            "status": status,
        }
        if taken_at:
            record["takenAt"] = taken_at
        records.append(_stamped(record))
    return records


def reports(owner_id: str = DEMO_OWNER_ID, family_member_ids: Sequence[str] = ()) -> list[Record]:
    blood_panel = {
        "parameters": {
            "Hemoglobin": {"value": 14.2, "unit": "g/dL", "normalRange": "12-16", "status": "normal"},
            "Glucose": {"value": 95, "unit": "mg/dL", "normalRange": "70-100", "status": "normal"},
            "Cholesterol": {"value": 220, "unit": "mg/dL", "normalRange": "<200", "status": "high"},
            "Blood Pressure": {"value": 145, "unit": "mmHg", "normalRange": "<140", "status": "high"},
            "Creatinine": {"value": 1.8, "unit": "mg/dL", "normalRange": "0.6-1.2", "status": "critical"},
        },
        "summary": {
            "normalCount": 2,
            "abnormalCount": 2,
            "criticalCount": 1,
            "overallStatus": "critical",
            "riskLevel": "high",
            "recommendations": [],
        },
    }
    urine_panel = {
        "parameters": {
            "pH": {"value": 6.5, "unit": "", "normalRange": "4.5-8.0", "status": "normal"},
            "Protein": {"value": 0, "unit": "mg/dL", "normalRange": "0-20", "status": "normal"},
        },
        "summary": {
            "normalCount": 2,
            "abnormalCount": 0,
            "criticalCount": 0,
            "overallStatus": "healthy",
            "riskLevel": "low",
            "recommendations": ["All parameters within normal range"],
        },
    }
    return [
        _stamped(
            {
                "id": "report_1",
                "userId": owner_id,
                "familyMemberId": None,
                "title": "Blood Test Results - January 2024",
                "reportType": "bloodTest",
                "fileUrl": "https://example.com/report1.pdf",
                "labName": "City Medical Lab",
                "doctorName": "Dr. Sarah Johnson",
                "uploadedAt": "2024-01-15T00:00:00+00:00",
                "analysis": blood_panel,
            }
        ),
        _stamped(
            {
                "id": "report_2",
                "userId": owner_id,
                "familyMemberId": _member_at(family_member_ids, 0),
                "title": "Urine Analysis - January 2024",
                "reportType": "urineTest",
                "fileUrl": "https://example.com/report2.pdf",
                "labName": "City Medical Lab",
                "doctorName": "Dr. Sarah Johnson",
                "uploadedAt": "2024-01-10T00:00:00+00:00",
                "analysis": urine_panel,
            }
        ),
        _stamped(
            {
                "id": "report_3",
                "userId": owner_id,
                "familyMemberId": _member_at(family_member_ids, 3),
                "title": "ECG Report - November 2023",
                "reportType": "ecg",
                "fileUrl": "https://example.com/report3.pdf",
                "labName": "City Medical Lab",
                "doctorName": "Dr. Emily Davis",
                "uploadedAt": "2023-11-15T00:00:00+00:00",
            }
        ),
    ]


def prescriptions(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    base = [
        ("demo-doctor-1", "Hypertension", "Lisinopril 10mg daily", "Take in the morning with food. Monitor blood pressure weekly.", "2024-01-01", 3),
        ("demo-doctor-1", "Type 2 Diabetes", "Metformin 500mg twice daily", "Monitor blood sugar levels. Take with meals.", "2024-01-05", 2),
        ("demo-doctor-2", "Migraine", "Sumatriptan 50mg as needed", "Take at onset of migraine symptoms. Maximum 2 tablets per day.", "2024-01-10", 1),
        ("demo-doctor-3", "Asthma", "Albuterol inhaler 2 puffs every 4-6 hours as needed", "Use before exercise and when experiencing shortness of breath.", "2024-01-15", 2),
        ("demo-doctor-1", "Vitamin D Deficiency", "Vitamin D3 2000 IU daily", "Take with food for better absorption. Recheck levels in 3 months.", "2024-01-20", 1),
    ]
    return [
        _stamped(
            {
                "id": f"pres{index}",
                "doctorId": doctor_id,
                "patientId": owner_id,
                "diagnosis": diagnosis,
                "medication": medication,
                "notes": notes,
                "prescribedDate": prescribed,
                "refills": refills,
                "status": "active",
            },
            created_at=f"{prescribed}T00:00:00+00:00",
        )
        for index, (doctor_id, diagnosis, medication, notes, prescribed, refills) in enumerate(
            base, start=1
        )
    ]


def appointments(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    base = [
        ("Dr. Sarah Johnson", "Cardiology", "2024-01-20T10:00:00+00:00", "Follow-up consultation", "confirmed", "City Medical Center"),
        ("Dr. Michael Chen", "Endocrinology", "2024-01-25T14:30:00+00:00", "Diabetes management review", "scheduled", "City Medical Center"),
        ("Dr. Emily Davis", "Pulmonology", "2024-02-01T09:00:00+00:00", "Asthma check-up", "scheduled", "Virtual"),
    ]
    return [
        _stamped(
            {
                "id": f"apt_{index}",
                "userId": owner_id,
                "patientId": owner_id,
                "doctorName": doctor,
                "specialty": specialty,
                "dateTime": when,
                "purpose": purpose,
                "status": status,
                "location": location,
            }
        )
        for index, (doctor, specialty, when, purpose, status, location) in enumerate(base, start=1)
    ]


def health_metrics(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    base = [
        ("Blood Pressure", 145, "mmHg", "high", "up", 90, 140),
        ("Blood Sugar", 98, "mg/dL", "normal", "stable", 70, 140),
        ("Cholesterol", 220, "mg/dL", "borderline", "up", 0, 200),
        ("BMI", 23.5, "", "normal", "stable", 18.5, 25),
    ]
    return [
        _stamped(
            {
                "id": f"metric_{index}",
                "userId": owner_id,
                "name": name,
                "value": value,
                "unit": unit,
                "status": status,
                "trend": trend,
                "targetRange": {"min": low, "max": high},
                "recordedAt": f"{FIXTURE_DATE}T0{index}:00:00+00:00",
            }
        )
        for index, (name, value, unit, status, trend, low, high) in enumerate(base, start=1)
    ]


def disease_analysis(
    owner_id: str = DEMO_OWNER_ID, family_member_ids: Sequence[str] = ()
) -> list[Record]:
    base = [
        ("Hypertension", "high", 75, ["High blood pressure", "Headaches"], ["Monitor blood pressure daily", "Reduce salt intake"]),
        ("Type 2 Diabetes", "medium", 45, ["Elevated blood sugar", "Increased thirst"], ["Monitor blood sugar regularly", "Annual checkups"]),
        ("Cardiovascular Disease", "medium", 35, ["Chest pain", "Fatigue"], ["Regular exercise", "Heart-healthy diet"]),
    ]
    return [
        _stamped(
            {
                "id": f"disease_{index + 1}",
                "userId": owner_id,
                "familyMemberId": _member_at(family_member_ids, index),
                "diseaseName": name,
                "riskLevel": risk,
                "probability": probability,
                "symptoms": symptoms,
                "recommendations": recommendations,
            }
        )
        for index, (name, risk, probability, symptoms, recommendations) in enumerate(base)
    ]


def health_trends(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    base = [
        ("January 2025", (140, 90, "high"), (95, 140, "normal"), (220, "high"), 75.2),
        ("December 2024", (135, 85, "normal"), (92, 135, "normal"), (215, "high"), 76.0),
        ("November 2024", (130, 80, "normal"), (90, 130, "normal"), (210, "high"), 77.0),
    ]
    return [
        _stamped(
            {
                "id": f"trend_{index}",
                "userId": owner_id,
                "month": month,
                "bloodPressure": {"systolic": bp[0], "diastolic": bp[1], "status": bp[2]},
                "bloodSugar": {"fasting": sugar[0], "postMeal": sugar[1], "status": sugar[2]},
                "cholesterol": {"total": chol[0], "status": chol[1]},
                "weight": {"current": weight, "target": 70, "status": "overweight"},
            }
        )
        for index, (month, bp, sugar, chol, weight) in enumerate(base, start=1)
    ]


def insurance_policies(
    owner_id: str = DEMO_OWNER_ID, family_member_ids: Sequence[str] = ()
) -> list[Record]:
    def policy(
        index: int,
        provider: str,
        number: str,
        policy_type: str,
        coverage: int,
        co_payments: tuple[int, int, int, int],
        deductibles: tuple[int, int],
        premium: int,
        phone: str,
        website: str,
        status: str = "active",
        family_member_id: str | None = None,
    ) -> Record:
        record = {
            "id": f"policy{index}",
            "userId": owner_id,
            "providerName": provider,
            "policyNumber": number,
            "policyType": policy_type,
            "coverageAmount": coverage,
            "coveragePeriod": {"startDate": "2024-01-01", "endDate": "2024-12-31"},
            "coPayments": {
                "doctorVisit": co_payments[0],
                "specialist": co_payments[1],
                "emergency": co_payments[2],
                "prescription": co_payments[3],
            },
            "deductibles": {"individual": deductibles[0], "family": deductibles[1]},
            "status": status,
            "premium": premium,
            "premiumFrequency": "monthly",
            "contactInfo": {
                "providerPhone": phone,
                "providerEmail": f"support@{website.removeprefix('www.')}",
                "providerWebsite": website,
                "claimsPhone": phone,
            },
            "documents": [
                {
                    "id": f"doc{index}",
                    "name": f"{provider} Policy Document.pdf",
                    "type": "policy",
                    "fileUrl": f"/demo-insurance/policy{index}.pdf",
                    "uploadedAt": "2024-01-01T00:00:00+00:00",
                }
            ],
            "claims": [],
        }
        if family_member_id:
            record["familyMemberId"] = family_member_id
        return _stamped(record)

    return [
        policy(1, "Star Health Insurance", "STAR-2024-001", "health", 500000, (500, 1000, 2000, 200), (10000, 20000), 1200, "1800-425-2255", "www.starhealth.in"),
        policy(2, "HDFC ERGO Dental", "HDFC-DENTAL-2024", "dental", 50000, (0, 0, 1000, 0), (2000, 4000), 800, "1800-266-7780", "www.hdfcergo.com", family_member_id=_member_at(family_member_ids, 0)),
        policy(3, "ICICI Lombard Vision", "ICICI-VISION-2024", "vision", 25000, (200, 500, 1000, 0), (1000, 2000), 400, "1800-266-9725", "www.icicilombard.com"),
        policy(4, "LIC Jeevan Anand", "LIC-LIFE-2024", "life", 2000000, (0, 0, 0, 0), (0, 0), 2500, "022-6827-6827", "www.licindia.in", status="pending_renewal"),
    ]


def self_reminders(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    every_day = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
    base = [
        ("Morning Blood Pressure Medication", "Take your blood pressure medication with breakfast", "medication", "daily", ["08:00"], every_day, "Lisinopril"),
        ("Diabetes Medication", "Take your diabetes medication with meals", "medication", "daily", ["08:00", "20:00"], every_day, "Metformin"),
        ("Blood Sugar Test", "Monitor blood glucose levels", "checkup", "weekly", ["07:30"], ["monday", "thursday"], ""),
    ]
    return [
        _stamped(
            {
                "id": f"reminder{index}",
                "userId": owner_id,
                "title": title,
                "description": description,
                "type": reminder_type,
                "frequency": frequency,
                "times": times,
                "days": days,
                "isActive": True,
                "medicationName": medication,
            }
        )
        for index, (title, description, reminder_type, frequency, times, days, medication) in enumerate(
            base, start=1
        )
    ]


def ai_insights(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    return [
        _stamped(
            {
                "id": "insight_1",
                "userId": owner_id,
                "type": "risk_alert",
                "title": "Critical creatinine level",
                "description": "Creatinine is above the normal range in the latest blood test.",
                "severity": "critical",
                "category": "kidney",
                "confidence": 0.9,
                "actionable": True,
                "relatedReports": ["report_1"],
            }
        ),
        _stamped(
            {
                "id": "insight_2",
                "userId": owner_id,
                "type": "health_trend",
                "title": "Blood pressure trending up",
                "description": "Blood pressure readings are above target and rising.",
                "severity": "medium",
                "category": "cardiovascular",
                "confidence": 0.75,
                "actionable": True,
                "relatedMetrics": ["metric_1"],
            }
        ),
    ]


def users(owner_id: str = DEMO_OWNER_ID) -> list[Record]:
    """The demo account itself; its id is the owner of every other fixture."""
    return [
        _stamped(
            {
                "id": owner_id,
                "email": "demo@example.com",
                "name": "Demo User",
                "role": "patient",
                "plan": "premium",
            }
        )
    ]
