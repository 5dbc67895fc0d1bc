# certparse

Building blocks for reading X.509 (RFC 5280) data: DER primitives,
distinguished names, algorithm identifiers, subject public key information,
ASN.1 times, signature algorithm parameters, PEM containers, signature
verification and structure validation.

## Installation

```
pip install certparse
```

Signature verification uses the `cryptography` library, which is installed
as a dependency.

## Errors

Decoding problems raise `certparse.asn1.X509Error`. Its `kind` attribute is
a member of `certparse.asn1.ErrorKind`, such as `INVALID_DATE`,
`INVALID_SPKI` or `SIGNATURE_VERIFICATION_ERROR`.

## DER primitives (`certparse.asn1`)

`parse_header`, `parse_any`, `parse_sequence`, `parse_oid`,
`parse_integer_bytes`, `parse_bit_string` and `parse_octet_string` each take
bytes and return the decoded value together with the remaining input.
`encode_tlv` builds one DER object from its class, constructed flag, tag and
content.

```python
from certparse.asn1 import Oid, parse_oid

oid = Oid.from_string("2.5.4.3")
der = bytes([0x06, 0x03]) + oid.to_der_content()
parsed, rest = parse_oid(der)
assert parsed == oid and rest == b""
```

## Object identifiers (`certparse.objects`)

```python
from certparse.objects import OID_X509_COMMON_NAME, oid2abbrev, oid2sn, oid_registry

oid2sn(OID_X509_COMMON_NAME, oid_registry())      # "commonName"
oid2abbrev(OID_X509_COMMON_NAME, oid_registry())  # "CN"
```

An OID that the registry does not know raises `NidError`. An `OidRegistry`
can be extended with `insert(oid, OidEntry(sn, description))`.

## Names (`certparse.x509`)

```python
from certparse.x509 import X509Name

name, remaining = X509Name.from_der(der_bytes)
print(str(name))  # e.g. "C=FR, ST=Some-State, CN=Test1 + CN=Test2"
for cn in name.iter_common_name():
    print(cn.as_str())
```

Attributes in one RDN are joined with `" + "`, RDNs with `", "`. Values that
are not string types are shown as upper-case hex. Besides
`iter_common_name` there are `iter_country`, `iter_organization`,
`iter_organizational_unit`, `iter_state_or_province`, `iter_locality`,
`iter_email` and the general `iter_by_oid`.

The same module holds `X509Version`, `ReasonCode`, `AlgorithmIdentifier`,
`parse_serial` and `parse_signature_value`.

## Public keys (`certparse.x509`, `certparse.public_key`)

```python
from certparse.x509 import SubjectPublicKeyInfo

spki, remaining = SubjectPublicKeyInfo.from_der(der_bytes)
key = spki.parsed()
print(type(key).__name__, key.key_size())
```

`parsed()` returns an `RSAPublicKey`, `ECPoint`, `DSAPublicKey`,
`GostR3410PublicKey`, `GostR34102012PublicKey` or `UnknownPublicKey`.

## Time values (`certparse.asn1time`)

```python
from certparse.asn1time import ASN1Time

t = ASN1Time.from_timestamp(0)
print(str(t))          # "Jan  1 00:00:00 1970 +00:00"
print(t.to_rfc2822())  # raises ValueError for years before 1900
```

`ASN1Time.from_der` reads a UTCTime or GeneralizedTime. Adding a `timedelta`
gives a new time. Subtracting two times gives a `timedelta`, or `None` if the
left one is not later.

## Signature algorithms (`certparse.signature_algorithm`)

`SignatureAlgorithm.from_algorithm_identifier` sorts an
`AlgorithmIdentifier` into a `SignatureKind` (RSA, RSASSA-PSS, RSAES-OAEP,
DSA, ECDSA, Ed25519). It decodes `RsaSsaPssParams` or `RsaAesOaepParams`
where those apply, with the RFC defaults for absent fields.
`EcdsaSigValue.from_der` splits an ECDSA signature into `r` and `s`.

## PEM (`certparse.pem`)

```python
from certparse.pem import Pem, parse_x509_pem

with open("bundle.pem", "rb") as handle:
    data = handle.read()

for pem in Pem.iter_from_buffer(data):
    print(pem.label, len(pem.contents))

first, remaining = parse_x509_pem(data)
```

`Pem.read(stream)` reads the next block from a binary stream. It returns the
block and the stream position after it. It raises `MissingHeaderError`,
`InvalidHeaderError`, `IncompletePemError` or `Base64DecodeError`, all
subclasses of `PemError`. Lines outside blocks are ignored.

## Signature verification (`certparse.verify`)

```python
from certparse.verify import verify_signature

verify_signature(public_key_info, signature_algorithm, signature_value, signed_bytes)
```

The supported algorithms are RSA PKCS#1 v1.5 with SHA-1, SHA-256, SHA-384 or
SHA-512, ECDSA with SHA-256 or SHA-384 on P-256 or P-384, and Ed25519. An
unsupported algorithm raises `X509Error` with
`SIGNATURE_UNSUPPORTED_ALGORITHM`. A bad signature raises `X509Error` with
`SIGNATURE_VERIFICATION_ERROR`.

## Validation (`certparse.validate`)

```python
from certparse.validate import VecLogger, X509NameStructureValidator, X509PublicKeyValidator

logger = VecLogger()
ok = X509NameStructureValidator().validate(name, logger)
ok &= X509PublicKeyValidator().validate(spki, logger)
print(ok, logger.warnings, logger.errors)
```

Validators are combined with `chain`. Messages can go to a `VecLogger`, a
`StderrLogger` or a `CallbackLogger`. Objects that check themselves can
subclass `Validate` and get `validate_to_vec()`.

## What it does not do

The package decodes the parts that certificates, CRLs and certification
requests are built from. It has no parser for a complete certificate, CRL or
certification request, and it does not decode extensions. To verify a
signature, you supply the signed bytes and the signature yourself. It has no
command-line tool.