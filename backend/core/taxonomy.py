"""
core.taxonomy — Crime-type taxonomy and translation table.

The mobile reporting client identifies crime types by a camelCase key
(``"onlinePredatoryBehavior"``) while complaints, units and officers are
stored against the human-readable display name
(``"Online Predatory Behavior"``).  Every crime type belongs to exactly
one ``CrimeCategory`` and every category is handled by exactly one unit.

The table is static seed data.  Any change to it is a deployment-time
data change, so bump ``TAXONOMY_VERSION`` together with the edit.

Usage::

    from core.taxonomy import CrimeTypeMapper

    CrimeTypeMapper.to_display_name("phishing")        # "Phishing"
    CrimeTypeMapper.category("Phishing")               # "Communication & Social Media Crimes"
    CrimeTypeMapper.normalize_for_store("phishing")    # "Phishing"
    CrimeTypeMapper.normalize_for_store("no-such")     # None

All lookups are case-insensitive and never raise: unknown, empty or
non-string input yields ``None`` (or an empty list).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.db import models

TAXONOMY_VERSION: str = "2024.1"


class CrimeCategory(models.TextChoices):
    """Closed set of crime categories; each is owned by one unit."""

    COMMUNICATION = "Communication & Social Media Crimes", "Communication & Social Media Crimes"
    FINANCIAL = "Financial & Economic Crimes", "Financial & Economic Crimes"
    DATA_PRIVACY = "Data & Privacy Crimes", "Data & Privacy Crimes"
    MALWARE = "Malware & System Attacks", "Malware & System Attacks"
    HARASSMENT = "Harassment & Exploitation", "Harassment & Exploitation"
    CONTENT = "Content-Related Crimes", "Content-Related Crimes"
    SYSTEM_DISRUPTION = "System Disruption & Sabotage", "System Disruption & Sabotage"
    GOVERNMENT = "Government & Terrorism", "Government & Terrorism"
    TECHNICAL = "Technical Exploitation", "Technical Exploitation"
    TARGETED = "Targeted Attacks", "Targeted Attacks"


#: Category → responsible unit name.
CATEGORY_UNITS: dict[str, str] = {
    CrimeCategory.COMMUNICATION: "Cyber Crime Investigation Cell",
    CrimeCategory.FINANCIAL: "Economic Offenses Wing",
    CrimeCategory.DATA_PRIVACY: "Cyber Security Division",
    CrimeCategory.MALWARE: "Cyber Crime Technical Unit",
    CrimeCategory.HARASSMENT: "Cyber Crime Against Women and Children",
    CrimeCategory.CONTENT: "Special Investigation Team",
    CrimeCategory.SYSTEM_DISRUPTION: "Critical Infrastructure Protection Unit",
    CrimeCategory.GOVERNMENT: "National Security Cyber Division",
    CrimeCategory.TECHNICAL: "Advanced Cyber Forensics Unit",
    CrimeCategory.TARGETED: "Special Cyber Operations Unit",
}


@dataclass(frozen=True)
class CrimeTypeMapping:
    """One row of the taxonomy table."""

    client_key: str
    display_name: str
    category: str
    unit: str


# (client_key, display_name) pairs grouped by category.
_TABLE: dict[str, list[tuple[str, str]]] = {
    CrimeCategory.COMMUNICATION: [
        ("phishing", "Phishing"),
        ("socialEngineering", "Social Engineering"),
        ("spamMessages", "Spam Messages"),
        ("fakeSocialMediaProfiles", "Fake Social Media Profiles"),
        ("onlineImpersonation", "Online Impersonation"),
        ("businessEmailCompromise", "Business Email Compromise"),
        ("smsFraud", "SMS Fraud"),
    ],
    CrimeCategory.FINANCIAL: [
        ("onlineBankingFraud", "Online Banking Fraud"),
        ("creditCardFraud", "Credit Card Fraud"),
        ("investmentScams", "Investment Scams"),
        ("cryptocurrencyFraud", "Cryptocurrency Fraud"),
        ("onlineShoppingScams", "Online Shopping Scams"),
        ("paymentGatewayFraud", "Payment Gateway Fraud"),
        ("insuranceFraud", "Insurance Fraud"),
        ("taxFraud", "Tax Fraud"),
        ("moneyLaundering", "Money Laundering"),
    ],
    CrimeCategory.DATA_PRIVACY: [
        ("identityTheft", "Identity Theft"),
        ("dataBreach", "Data Breach"),
        ("unauthorizedSystemAccess", "Unauthorized System Access"),
        ("corporateEspionage", "Corporate Espionage"),
        ("governmentDataTheft", "Government Data Theft"),
        ("medicalRecordsTheft", "Medical Records Theft"),
        ("personalInformationTheft", "Personal Information Theft"),
        ("accountTakeover", "Account Takeover"),
    ],
    CrimeCategory.MALWARE: [
        ("ransomware", "Ransomware"),
        ("virusAttacks", "Virus Attacks"),
        ("trojanHorses", "Trojan Horses"),
        ("spyware", "Spyware"),
        ("adware", "Adware"),
        ("worms", "Worms"),
        ("keyloggers", "Keyloggers"),
        ("rootkits", "Rootkits"),
        ("cryptojacking", "Cryptojacking"),
        ("botnetAttacks", "Botnet Attacks"),
    ],
    CrimeCategory.HARASSMENT: [
        ("cyberstalking", "Cyberstalking"),
        ("onlineHarassment", "Online Harassment"),
        ("cyberbullying", "Cyberbullying"),
        ("revengePorn", "Revenge Porn"),
        ("sextortion", "Sextortion"),
        ("onlinePredatoryBehavior", "Online Predatory Behavior"),
        ("doxxing", "Doxxing"),
        ("hateSpeech", "Hate Speech"),
    ],
    CrimeCategory.CONTENT: [
        ("childSexualAbuseMaterial", "Child Sexual Abuse Material"),
        ("illegalContentDistribution", "Illegal Content Distribution"),
        ("copyrightInfringement", "Copyright Infringement"),
        ("softwarePiracy", "Software Piracy"),
        ("illegalOnlineGambling", "Illegal Online Gambling"),
        ("onlineDrugTrafficking", "Online Drug Trafficking"),
        ("illegalWeaponsSales", "Illegal Weapons Sales"),
        ("humanTrafficking", "Human Trafficking"),
    ],
    CrimeCategory.SYSTEM_DISRUPTION: [
        ("denialOfServiceAttacks", "Denial of Service Attacks"),
        ("websiteDefacement", "Website Defacement"),
        ("systemSabotage", "System Sabotage"),
        ("networkIntrusion", "Network Intrusion"),
        ("sqlInjection", "SQL Injection"),
        ("crossSiteScripting", "Cross-Site Scripting"),
        ("manInTheMiddleAttacks", "Man-in-the-Middle Attacks"),
    ],
    CrimeCategory.GOVERNMENT: [
        ("cyberterrorism", "Cyberterrorism"),
        ("cyberWarfare", "Cyber Warfare"),
        ("governmentSystemHacking", "Government System Hacking"),
        ("electionInterference", "Election Interference"),
        ("criticalInfrastructureAttacks", "Critical Infrastructure Attacks"),
        ("propagandaDistribution", "Propaganda Distribution"),
        ("stateSponsoredAttacks", "State-Sponsored Attacks"),
    ],
    CrimeCategory.TECHNICAL: [
        ("zeroDayExploits", "Zero-Day Exploits"),
        ("vulnerabilityExploitation", "Vulnerability Exploitation"),
        ("backdoorCreation", "Backdoor Creation"),
        ("privilegeEscalation", "Privilege Escalation"),
        ("codeInjection", "Code Injection"),
        ("bufferOverflowAttacks", "Buffer Overflow Attacks"),
    ],
    CrimeCategory.TARGETED: [
        ("advancedPersistentThreats", "Advanced Persistent Threats"),
        ("spearPhishing", "Spear Phishing"),
        ("ceoFraud", "CEO Fraud"),
        ("supplyChainAttacks", "Supply Chain Attacks"),
        ("insiderThreats", "Insider Threats"),
    ],
}

CRIME_TYPE_MAPPINGS: tuple[CrimeTypeMapping, ...] = tuple(
    CrimeTypeMapping(
        client_key=client_key,
        display_name=display_name,
        category=str(category),
        unit=CATEGORY_UNITS[category],
    )
    for category, rows in _TABLE.items()
    for client_key, display_name in rows
)


def _build_index(attr: str) -> dict[str, CrimeTypeMapping]:
    index: dict[str, CrimeTypeMapping] = {}
    for mapping in CRIME_TYPE_MAPPINGS:
        key = getattr(mapping, attr).lower()
        if key in index:
            raise ValueError(f"Duplicate crime-type {attr}: {getattr(mapping, attr)!r}")
        index[key] = mapping
    return index


_BY_CLIENT_KEY = _build_index("client_key")
_BY_DISPLAY_NAME = _build_index("display_name")


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value.lower() or None


class CrimeTypeMapper:
    """
    Stateless translation service over the taxonomy table.

    All methods are staticmethods; the lookup maps are module-level and
    read-only, so the mapper is safe to share between threads.
    """

    @staticmethod
    def mapping_for(value: Any) -> CrimeTypeMapping | None:
        """Resolve either representation (client key first) to its mapping."""
        key = _clean(value)
        if key is None:
            return None
        return _BY_CLIENT_KEY.get(key) or _BY_DISPLAY_NAME.get(key)

    @staticmethod
    def to_display_name(client_key: Any) -> str | None:
        """``"onlinePredatoryBehavior"`` → ``"Online Predatory Behavior"``."""
        key = _clean(client_key)
        mapping = _BY_CLIENT_KEY.get(key) if key else None
        return mapping.display_name if mapping else None

    @staticmethod
    def to_client_key(display_name: Any) -> str | None:
        """``"Online Predatory Behavior"`` → ``"onlinePredatoryBehavior"``."""
        key = _clean(display_name)
        mapping = _BY_DISPLAY_NAME.get(key) if key else None
        return mapping.client_key if mapping else None

    @staticmethod
    def category(crime_type: Any) -> str | None:
        mapping = CrimeTypeMapper.mapping_for(crime_type)
        return mapping.category if mapping else None

    @staticmethod
    def unit(crime_type: Any) -> str | None:
        mapping = CrimeTypeMapper.mapping_for(crime_type)
        return mapping.unit if mapping else None

    @staticmethod
    def normalize_for_store(crime_type: Any) -> str | None:
        """
        Return the canonical display name for either representation.

        Idempotent: a canonical display name normalizes to itself.  A value
        matching neither representation yields ``None``.
        """
        mapping = CrimeTypeMapper.mapping_for(crime_type)
        return mapping.display_name if mapping else None

    @staticmethod
    def is_valid(crime_type: Any) -> bool:
        return CrimeTypeMapper.mapping_for(crime_type) is not None

    @staticmethod
    def find_candidates(fragment: Any) -> list[CrimeTypeMapping]:
        """
        Case-insensitive substring search over both representations.

        Intended for diagnostics and for the last-resort crime-type
        resolution in the officer directory.  Results keep table order.
        """
        needle = _clean(fragment)
        if needle is None:
            return []
        return [
            mapping
            for mapping in CRIME_TYPE_MAPPINGS
            if needle in mapping.client_key.lower()
            or needle in mapping.display_name.lower()
        ]

    @staticmethod
    def crime_types_for_category(category: Any) -> list[CrimeTypeMapping]:
        key = _clean(category)
        if key is None:
            return []
        return [m for m in CRIME_TYPE_MAPPINGS if m.category.lower() == key]

    @staticmethod
    def crime_types_for_unit(unit: Any) -> list[CrimeTypeMapping]:
        key = _clean(unit)
        if key is None:
            return []
        return [m for m in CRIME_TYPE_MAPPINGS if m.unit.lower() == key]

    @staticmethod
    def unit_for_category(category: Any) -> str | None:
        key = _clean(category)
        if key is None:
            return None
        for name, unit in CATEGORY_UNITS.items():
            if name.lower() == key:
                return unit
        return None

    @staticmethod
    def categories() -> list[str]:
        return [str(c) for c in CrimeCategory.values]

    @staticmethod
    def all_mappings() -> list[CrimeTypeMapping]:
        return list(CRIME_TYPE_MAPPINGS)
