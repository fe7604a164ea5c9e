"""
Test data factories.

Sample document texts as `pdftotext -layout` renders them, plus a factory
for TaskSections built directly from lines.
"""

from typing import Optional

from models.shipment import TaskSection, TaskType


# ===================
# SAMPLE DOCUMENTS
# ===================

ENGLISH_DOC = """LOAD INSTRUCTION
Shipment: 4359172      Hoyer GmbH
Truck          AB 1234 CD        Trailer info
Driver         John Smith
Container      HOYU 123456-7
Tankdetails    25000 L
Tare weight    3200 kg
General remark Please call dispatch
before arrival at the site
LOAD   Chemie Werk GmbH
Industriestrasse 5
DE-68219 Mannheim
In order of: ACME Chemicals Ltd
Customer reference: CR-1001
Load reference: LR-2002
Load date: 03/11/2025 12:00 - 14:00
Product: Sulphuric acid
  98% concentration
Weight: 24000 kg
Volume: 30 m3
Temperature: 20 C
Compartment: 3
Remark: Bring safety goggles
  Gate 4
UNLOAD   Kunde SA
Rue de la Gare 12
FR 75001 Paris
Unload reference: UR-3003
Unload date: 04/11/2025 08:00 - 10:00
CLEANING   Wash Station BV
Havenweg 1
NL 3011 Rotterdam
"""

GERMAN_DOC = """ENTLADE ANWEISUNG
Shipment 5120033
Fahrer         Klaus Meyer
Chassis        CH-778
Tank           HOYU 765432-1
ENTLADEN   BASF SE
Carl-Bosch-Strasse 38
DE 67056 Ludwigshafen
Im Auftrag von Chemtrade AG
Entladereferenz: ER-55
Entladedatum: 05/12/2025 06:30 - 09:00
Produkt: Natronlauge
Gewicht: 22000 kg
Kammer: 2
Hinweis: Anmeldung an Pforte 2
"""

FRENCH_DOC = """INSTRUCTIONS DE
CHARGEMENT
Shipment: 6000123
Chauffeur      Jean Dupont
N° camion      FR-456-AB
Commentaires généraux Livraison urgente
PRISE EN CHARGE   Total Raffinerie
Route du Port 1
FR 76700 Harfleur
Pour le compte de Total Energies
Référence client: RC-77
Date de chargement: 10/01/2026 07:00 - 08:30
Produit: Gasoil
DÉCHARGEMENT   Depot Lyon
Rue Industrielle 3
FR 69007 Lyon
Référence de livraison: RL-88
"""

# No "Shipment" line anywhere
NO_SHIPMENT_ID_DOC = """UNLOAD INSTRUCTION
Driver         Anna Kowalska
UNLOAD   Depot Antwerpen
Haven 1
BE 2000 Antwerpen
"""

# Malformed date and compartment inside an otherwise valid document
MALFORMED_DETAILS_DOC = """LOAD INSTRUCTION
Shipment: 7000001
LOAD   Chemie Werk GmbH
Industriestrasse 5
DE-68219 Mannheim
Load date: tomorrow morning
Compartment: two
UNLOAD   Kunde SA
Rue de la Gare 12
FR 75001 Paris
Unload date: 04/11/2025
"""


class TaskSectionFactory:
    """
    Factory for creating test TaskSections.

    Usage:
        section = TaskSectionFactory.create(lines=["LOAD   Depot", "Street 1"])
        section = TaskSectionFactory.create(task_type=TaskType.UNLOAD)
    """

    @classmethod
    def create(
        cls,
        task_type: TaskType = TaskType.LOAD,
        lines: Optional[list[str]] = None,
        shipment_id: int = 0,
    ) -> TaskSection:
        """
        Create a TaskSection.

        Args:
            task_type: Task type
            lines: Raw section lines (a three-line address by default)
            shipment_id: Owning shipment id

        Returns:
            TaskSection
        """
        if lines is None:
            lines = [
                f"{task_type.value.upper()}   Depot GmbH",
                "Hafenstrasse 1",
                "DE-20457 Hamburg",
            ]
        return TaskSection(task_type=task_type, lines=list(lines), shipment_id=shipment_id)
