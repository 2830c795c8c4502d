"""Record type to expected field types.

The table only drives whole-record extraction.  It does not enforce a
schema: record types missing from it use :data:`FALLBACK_FIELD_TYPES`.
"""

from __future__ import annotations

from types import MappingProxyType

FALLBACK_FIELD_TYPES: tuple[str, ...] = (
    "login",
    "password",
    "url",
    "text",
    "multiline",
    "host",
    "name",
    "email",
    "phone",
    "address",
    "oneTimeCode",
    "otp",
    "keyPair",
    "paymentCard",
    "bankAccount",
    "accountNumber",
    "licenseNumber",
    "secret",
    "note",
    "date",
    "birthDate",
    "expirationDate",
    "pinCode",
    "fileRef",
    "addressRef",
    "cardRef",
    "pamHostname",
    "pamResources",
    "pamSettings",
    "pamRemoteBrowserSettings",
    "databaseType",
    "directoryType",
    "wifiEncryption",
    "isSSIDHidden",
    "passkey",
    "appFiller",
    "script",
    "rbiUrl",
    "dropdown",
    "checkbox",
    "recordRef",
    "schedule",
    "trafficEncryptionSeed",
    "securityQuestion",
)

FIELD_TYPES_BY_RECORD_TYPE: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        # Standard templates
        "login": ("login", "password", "url", "oneTimeCode", "otp"),
        "general": ("text", "login", "password", "url", "email", "oneTimeCode"),
        "bankAccount": ("bankAccount", "name", "login", "password", "url", "cardRef", "oneTimeCode"),
        "bankCard": ("paymentCard", "text", "pinCode", "addressRef", "cardRef"),
        "address": ("address",),
        "contact": ("name", "text", "email", "phone", "addressRef"),
        "birthCertificate": ("name", "birthDate"),
        "driverLicense": ("accountNumber", "name", "birthDate", "addressRef", "expirationDate"),
        "passport": ("accountNumber", "name", "birthDate", "addressRef", "expirationDate", "date", "password"),
        "ssnCard": ("accountNumber", "name"),
        "healthInsurance": ("accountNumber", "name", "login", "password", "url"),
        "membership": ("accountNumber", "name", "password"),
        "softwareLicense": ("licenseNumber", "expirationDate", "date"),
        "encryptedNotes": ("note", "date"),
        "file": ("fileRef",),
        "photo": ("fileRef",),
        "sshKeys": ("login", "host", "keyPair", "passphrase", "password"),
        "serverCredentials": ("host", "login", "password", "text"),
        "databaseCredentials": ("host", "login", "password", "databaseType", "text"),
        "wireless": ("text", "password", "wifiEncryption", "isSSIDHidden"),
        "passkey": ("passkey", "login", "url", "text"),
        "script": ("script", "text", "multiline", "fileRef"),
        "appFiller": ("appFiller", "login", "password", "url"),
        # PAM templates
        "pamUser": ("login", "password", "host", "pamHostname", "pamResources", "pamSettings"),
        "pamMachine": ("pamHostname", "host", "login", "password", "pamResources", "pamSettings", "keyPair"),
        "pamDatabase": ("host", "login", "password", "databaseType", "pamResources", "pamSettings"),
        "pamDirectory": ("host", "login", "password", "directoryType", "pamResources", "pamSettings"),
        "pamRemoteBrowser": ("url", "login", "password", "pamRemoteBrowserSettings", "rbiUrl"),
        "pamNetworkConfiguration": ("pamHostname", "pamResources", "pamSettings", "schedule", "trafficEncryptionSeed"),
    }
)


def field_types_for(record_type: str) -> tuple[str, ...]:
    """Return the expected field types for *record_type*."""
    return FIELD_TYPES_BY_RECORD_TYPE.get(record_type, FALLBACK_FIELD_TYPES)
