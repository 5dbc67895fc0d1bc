"""Registry of known object identifiers and their names."""

from __future__ import annotations

from dataclasses import dataclass

from .asn1 import Oid


class NidError(LookupError):
    """The OID is not known to the registry."""


@dataclass(frozen=True)
class OidEntry:
    sn: str
    description: str


class OidRegistry:
    """A mapping from OIDs to short names and descriptions."""

    def __init__(self, entries=None) -> None:
        self._entries: dict[Oid, OidEntry] = dict(entries or {})

    def get(self, oid: Oid) -> OidEntry | None:
        return self._entries.get(oid)

    def insert(self, oid: Oid, entry: OidEntry) -> None:
        self._entries[oid] = entry

    def __contains__(self, oid: object) -> bool:
        return oid in self._entries

    def __len__(self) -> int:
        return len(self._entries)


OID_X509_COMMON_NAME = Oid.from_string("2.5.4.3")
OID_X509_COUNTRY_NAME = Oid.from_string("2.5.4.6")
OID_X509_LOCALITY_NAME = Oid.from_string("2.5.4.7")
OID_X509_STATE_OR_PROVINCE_NAME = Oid.from_string("2.5.4.8")
OID_X509_ORGANIZATION_NAME = Oid.from_string("2.5.4.10")
OID_X509_ORGANIZATIONAL_UNIT = Oid.from_string("2.5.4.11")
OID_DOMAIN_COMPONENT = Oid.from_string("0.9.2342.19200300.100.1.25")
OID_PKCS9_EMAIL_ADDRESS = Oid.from_string("1.2.840.113549.1.9.1")
OID_PKCS1_RSAENCRYPTION = Oid.from_string("1.2.840.113549.1.1.1")
OID_PKCS1_SHA1WITHRSA = Oid.from_string("1.2.840.113549.1.1.5")
OID_PKCS1_RSASSAPSS = Oid.from_string("1.2.840.113549.1.1.10")
OID_PKCS1_SHA256WITHRSA = Oid.from_string("1.2.840.113549.1.1.11")
OID_PKCS1_SHA384WITHRSA = Oid.from_string("1.2.840.113549.1.1.12")
OID_PKCS1_SHA512WITHRSA = Oid.from_string("1.2.840.113549.1.1.13")
OID_PKCS1_MGF1 = Oid.from_string("1.2.840.113549.1.1.8")
OID_SHA1_WITH_RSA = Oid.from_string("1.3.14.3.2.29")
OID_HASH_SHA1 = Oid.from_string("1.3.14.3.2.26")
OID_NIST_HASH_SHA256 = Oid.from_string("2.16.840.1.101.3.4.2.1")
OID_NIST_HASH_SHA384 = Oid.from_string("2.16.840.1.101.3.4.2.2")
OID_NIST_HASH_SHA512 = Oid.from_string("2.16.840.1.101.3.4.2.3")
OID_KEY_TYPE_EC_PUBLIC_KEY = Oid.from_string("1.2.840.10045.2.1")
OID_KEY_TYPE_DSA = Oid.from_string("1.2.840.10040.4.1")
OID_SIG_ECDSA_WITH_SHA256 = Oid.from_string("1.2.840.10045.4.3.2")
OID_SIG_ECDSA_WITH_SHA384 = Oid.from_string("1.2.840.10045.4.3.3")
OID_SIG_ED25519 = Oid.from_string("1.3.101.112")
OID_EC_P256 = Oid.from_string("1.2.840.10045.3.1.7")
OID_NIST_EC_P384 = Oid.from_string("1.3.132.0.34")
OID_GOST_R3410_2001 = Oid.from_string("1.2.643.2.2.19")
OID_KEY_TYPE_GOST_R3410_2012_256 = Oid.from_string("1.2.643.7.1.1.1.1")
OID_KEY_TYPE_GOST_R3410_2012_512 = Oid.from_string("1.2.643.7.1.1.1.2")

_DEFAULT_ENTRIES = {
    OID_X509_COMMON_NAME: ("commonName", "Common Name"),
    Oid.from_string("2.5.4.4"): ("surname", "Surname"),
    Oid.from_string("2.5.4.5"): ("serialNumber", "Serial Number"),
    OID_X509_COUNTRY_NAME: ("countryName", "Country Name"),
    OID_X509_LOCALITY_NAME: ("localityName", "Locality Name"),
    OID_X509_STATE_OR_PROVINCE_NAME: ("stateOrProvinceName", "State or Province Name"),
    Oid.from_string("2.5.4.9"): ("streetAddress", "Street Address"),
    OID_X509_ORGANIZATION_NAME: ("organizationName", "Organization Name"),
    OID_X509_ORGANIZATIONAL_UNIT: ("organizationalUnit", "Organizational Unit"),
    Oid.from_string("2.5.4.12"): ("title", "Title"),
    Oid.from_string("2.5.4.42"): ("givenName", "Given Name"),
    OID_DOMAIN_COMPONENT: ("domainComponent", "Domain Component"),
    OID_PKCS9_EMAIL_ADDRESS: ("emailAddress", "Email Address attribute for use in signatures"),
    Oid.from_string("1.2.840.113549.1.9.7"): ("challengePassword", "Challenge Password"),
    Oid.from_string("1.2.840.113549.1.9.14"): ("extensionRequest", "Extension Request"),
    OID_PKCS1_RSAENCRYPTION: ("rsaEncryption", "RSAES-PKCS1-v1_5 encryption scheme"),
    Oid.from_string("1.2.840.113549.1.1.4"): ("md5WithRSAEncryption", "MD5 with RSA encryption"),
    OID_PKCS1_SHA1WITHRSA: ("sha1WithRSAEncryption", "SHA1 with RSA encryption"),
    Oid.from_string("1.2.840.113549.1.1.7"): ("rsaes-oaep", "RSAES-OAEP encryption scheme"),
    Oid.from_string("1.2.840.113549.1.1.9"): ("pSpecified", "P-specified"),
    OID_PKCS1_RSASSAPSS: ("rsassa-pss", "RSA Signature Scheme with Appendix - PSS"),
    OID_PKCS1_SHA256WITHRSA: ("sha256WithRSAEncryption", "SHA256 with RSA encryption"),
    OID_PKCS1_SHA384WITHRSA: ("sha384WithRSAEncryption", "SHA384 with RSA encryption"),
    OID_PKCS1_SHA512WITHRSA: ("sha512WithRSAEncryption", "SHA512 with RSA encryption"),
    OID_SHA1_WITH_RSA: ("sha1WithRSASignature", "SHA1 with RSA signature"),
    OID_HASH_SHA1: ("sha1", "Secure Hash Algorithm SHA1"),
    OID_NIST_HASH_SHA256: ("sha256", "Secure Hash Algorithm that uses a 256 bit key (SHA256)"),
    OID_NIST_HASH_SHA384: ("sha384", "Secure Hash Algorithm that uses a 384 bit key (SHA384)"),
    OID_NIST_HASH_SHA512: ("sha512", "Secure Hash Algorithm that uses a 512 bit key (SHA512)"),
    OID_KEY_TYPE_EC_PUBLIC_KEY: ("id-ecPublicKey", "Elliptic curve public key cryptography"),
    OID_KEY_TYPE_DSA: ("id-dsa", "DSA"),
    Oid.from_string("1.2.840.10040.4.3"): ("id-dsa-with-sha1", "DSA with SHA1"),
    Oid.from_string("1.2.840.10045.4.1"): ("ecdsa-with-SHA1", "ECDSA with SHA1"),
    OID_SIG_ECDSA_WITH_SHA256: ("ecdsa-with-SHA256", "ECDSA with SHA256"),
    OID_SIG_ECDSA_WITH_SHA384: ("ecdsa-with-SHA384", "ECDSA with SHA384"),
    Oid.from_string("1.2.840.10045.4.3.4"): ("ecdsa-with-SHA512", "ECDSA with SHA512"),
    OID_SIG_ED25519: ("ed25519", "Edwards-curve Digital Signature Algorithm (EdDSA) Ed25519"),
    Oid.from_string("1.3.101.113"): ("ed448", "Edwards-curve Digital Signature Algorithm (EdDSA) Ed448"),
    OID_EC_P256: ("prime256v1", "P-256 elliptic curve parameter"),
    OID_NIST_EC_P384: ("secp384r1", "P-384 elliptic curve parameter"),
    Oid.from_string("1.3.132.0.35"): ("secp521r1", "P-521 elliptic curve parameter"),
    OID_GOST_R3410_2001: ("id-GostR3410-2001", "GOST R 34.10-2001"),
    OID_KEY_TYPE_GOST_R3410_2012_256: ("id-tc26-gost3410-12-256", "GOST R 34.10-2012, 256 bits"),
    OID_KEY_TYPE_GOST_R3410_2012_512: ("id-tc26-gost3410-12-512", "GOST R 34.10-2012, 512 bits"),
    Oid.from_string("2.5.29.14"): ("subjectKeyIdentifier", "X509v3 Subject Key Identifier"),
    Oid.from_string("2.5.29.15"): ("keyUsage", "X509v3 Key Usage"),
    Oid.from_string("2.5.29.17"): ("subjectAltName", "X509v3 Subject Alternative Name"),
    Oid.from_string("2.5.29.18"): ("issuerAltName", "X509v3 Issuer Alternative Name"),
    Oid.from_string("2.5.29.19"): ("basicConstraints", "X509v3 Basic Constraints"),
    Oid.from_string("2.5.29.20"): ("crlNumber", "X509v3 CRL Number"),
    Oid.from_string("2.5.29.21"): ("reasonCode", "X509v3 Reason Code"),
    Oid.from_string("2.5.29.24"): ("invalidityDate", "X509v3 Invalidity Date"),
    Oid.from_string("2.5.29.30"): ("nameConstraints", "X509v3 Name Constraints"),
    Oid.from_string("2.5.29.31"): ("crlDistributionPoints", "X509v3 CRL Distribution Points"),
    Oid.from_string("2.5.29.32"): ("certificatePolicies", "X509v3 Certificate Policies"),
    Oid.from_string("2.5.29.35"): ("authorityKeyIdentifier", "X509v3 Authority Key Identifier"),
    Oid.from_string("2.5.29.37"): ("extendedKeyUsage", "X509v3 Extended Key Usage"),
    Oid.from_string("1.3.6.1.5.5.7.1.1"): ("authorityInfoAccess", "Authority Information Access"),
    Oid.from_string("1.3.6.1.5.5.7.48.1"): ("ocsp", "PKIX OCSP"),
    Oid.from_string("1.3.6.1.5.5.7.48.2"): ("caIssuers", "PKIX CA Issuers"),
    OID_PKCS1_MGF1: ("id-mgf1", "Mask Generator Function 1 (MGF1)"),
}

_OID_REGISTRY = OidRegistry({oid: OidEntry(sn, d) for oid, (sn, d) in _DEFAULT_ENTRIES.items()})

_ABBREVIATIONS = {
    OID_X509_COMMON_NAME: "CN",
    OID_X509_COUNTRY_NAME: "C",
    OID_X509_LOCALITY_NAME: "L",
    OID_X509_STATE_OR_PROVINCE_NAME: "ST",
    OID_X509_ORGANIZATION_NAME: "O",
    OID_X509_ORGANIZATIONAL_UNIT: "OU",
    OID_DOMAIN_COMPONENT: "DC",
    OID_PKCS9_EMAIL_ADDRESS: "Email",
}


def oid_registry() -> OidRegistry:
    """Return the default registry of known OIDs."""
    return _OID_REGISTRY


def _lookup(oid: Oid, registry: OidRegistry) -> OidEntry:
    entry = registry.get(oid)
    if entry is None:
        raise NidError(str(oid))
    return entry


def oid2abbrev(oid: Oid, registry: OidRegistry) -> str:
    """Return the abbreviation (such as CN), or else the short name."""
    abbrev = _ABBREVIATIONS.get(oid)
    return abbrev if abbrev is not None else _lookup(oid, registry).sn


def oid2sn(oid: Oid, registry: OidRegistry) -> str:
    return _lookup(oid, registry).sn


def oid2description(oid: Oid, registry: OidRegistry) -> str:
    return _lookup(oid, registry).description