# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

import unittest

from pkicodes.certsrvenums import (
    CODE_ENUMS,
    CAResponseDisposition,
    CertificateRequestDisposition,
    CertificateRequestType,
)
from pkicodes.config_vars import LookupConfig
from pkicodes.exceptions import UnknownSymbol, UnrecognizedValue


class TestCertsrvEnumValues(unittest.TestCase):
    def test_ca_response_disposition_values(self):
        """
        GIVEN the CAResponseDisposition enum.
        WHEN the members are listed with their values,
        THEN they match the values defined by the certificate services interface.
        """
        expected = {
            "Incomplete": 0,
            "Error": 1,
            "Denied": 2,
            "Issued": 3,
            "IssuedOutOfBand": 4,
            "UnderSubmission": 5,
            "Revoked": 6,
        }
        result = {name: member.value for name, member in CAResponseDisposition.__members__.items()}
        self.assertEqual(result, expected)

    def test_certificate_request_disposition_values(self):
        """
        GIVEN the CertificateRequestDisposition enum.
        WHEN the members are listed with their values,
        THEN they match the values of the CA database.
        """
        expected = {
            "Active": 8,
            "Pending": 9,
            "Foreign": 12,
            "CACert": 15,
            "CACertChain": 16,
            "KRACert": 17,
            "Issued": 20,
            "Revoked": 21,
            "Error": 30,
            "Denied": 31,
        }
        result = {name: member.value for name, member in CertificateRequestDisposition.__members__.items()}
        self.assertEqual(result, expected)

    def test_certificate_request_type_values(self):
        """
        GIVEN the CertificateRequestType flag enum.
        WHEN the members are listed with their values,
        THEN all eight flags are present with their values, including the zero and multi-bit members.
        """
        expected = {
            "FormatAny": 0,
            "PKCS10": 256,
            "KeyGen": 512,
            "PKCS7": 768,
            "CMC": 1024,
            "RPC": 131072,
            "FullResponse": 262144,
            "CRLs": 524288,
        }
        result = {name: int(member) for name, member in CertificateRequestType.__members__.items()}
        self.assertEqual(result, expected)
        self.assertEqual(CertificateRequestType.get_names(), list(expected))

    def test_values_are_unique_per_domain(self):
        """
        GIVEN all code domains.
        WHEN the values of each domain are collected,
        THEN no value appears twice within a domain.
        """
        for enum_cls in CODE_ENUMS:
            values = [int(member) for member in enum_cls.__members__.values()]
            self.assertEqual(len(values), len(set(values)), enum_cls.__name__)

    def test_name_value_name_round_trip(self):
        """
        GIVEN every symbol of every code domain.
        WHEN the name is converted into its value and back,
        THEN the original name is returned.
        """
        for enum_cls in CODE_ENUMS:
            for name in enum_cls.get_names():
                value = enum_cls.from_name(name).value
                self.assertEqual(enum_cls.from_value(value).name, name)

    def test_domains_are_independent(self):
        """
        GIVEN the `Revoked` member of both disposition domains.
        WHEN the values are compared,
        THEN they differ and are distinct types.
        """
        self.assertEqual(CAResponseDisposition.Revoked, 6)
        self.assertEqual(CertificateRequestDisposition.Revoked, 21)
        self.assertEqual(CertificateRequestDisposition.Denied, 31)
        self.assertIsNot(type(CAResponseDisposition.Revoked), type(CertificateRequestDisposition.Revoked))


class TestCertsrvEnumLookups(unittest.TestCase):
    def test_from_name_exact_and_case_insensitive(self):
        """
        GIVEN the names "Issued" and "issuedoutofband".
        WHEN they are looked up in the CAResponseDisposition domain,
        THEN the matching members are returned.
        """
        self.assertIs(CAResponseDisposition.from_name("Issued"), CAResponseDisposition.Issued)
        self.assertIs(CAResponseDisposition.from_name(" issuedoutofband "), CAResponseDisposition.IssuedOutOfBand)

    def test_from_name_native_name(self):
        """
        GIVEN the certificate services constant names.
        WHEN they are looked up,
        THEN they resolve to the same members as the symbolic names.
        """
        result = CAResponseDisposition.from_name("CR_DISP_UNDER_SUBMISSION")
        self.assertIs(result, CAResponseDisposition.UnderSubmission)
        result = CertificateRequestDisposition.from_name("DB_DISP_CA_CERT_CHAIN")
        self.assertIs(result, CertificateRequestDisposition.CACertChain)
        self.assertIs(CertificateRequestType.from_name("cr_in_fullresponse"), CertificateRequestType.FullResponse)

    def test_from_name_respects_config(self):
        """
        GIVEN a lookup configuration which disables case-insensitive and native name matching.
        WHEN a name in wrong case or a constant name is looked up,
        THEN an UnknownSymbol is raised.
        """
        config = LookupConfig(case_insensitive=False, allow_native_names=False)
        with self.assertRaises(UnknownSymbol):
            CAResponseDisposition.from_name("issued", config=config)
        with self.assertRaises(UnknownSymbol):
            CAResponseDisposition.from_name("CR_DISP_ISSUED", config=config)

    def test_from_name_unknown_symbol(self):
        """
        GIVEN a name which is not a member of the CertificateRequestDisposition domain.
        WHEN the name is looked up,
        THEN an UnknownSymbol is raised, which carries the name and the domain.
        """
        with self.assertRaises(UnknownSymbol) as cm:
            CertificateRequestDisposition.from_name("IssuedOutOfBand")
        self.assertEqual(cm.exception.name, "IssuedOutOfBand")
        self.assertEqual(cm.exception.domain, "CertificateRequestDisposition")
        self.assertIsInstance(cm.exception, LookupError)

    def test_from_value_unrecognized(self):
        """
        GIVEN the value 999.
        WHEN it is looked up in every code domain,
        THEN an UnrecognizedValue is raised.
        """
        for enum_cls in CODE_ENUMS:
            with self.assertRaises(UnrecognizedValue) as cm:
                enum_cls.from_value(999)
            self.assertEqual(cm.exception.value, 999)
            self.assertEqual(cm.exception.domain, enum_cls.__name__)

    def test_from_value_composite_flag_is_not_a_member(self):
        """
        GIVEN the combined request type PKCS10 | RPC.
        WHEN it is looked up by exact value,
        THEN an UnrecognizedValue is raised, because only single members are matched.
        """
        with self.assertRaises(UnrecognizedValue):
            CertificateRequestType.from_value(131328)

    def test_from_value_not_an_integer(self):
        """
        GIVEN a string which is not an integer.
        WHEN it is looked up by value,
        THEN a ValueError is raised.
        """
        with self.assertRaises(ValueError):
            CAResponseDisposition.from_value("three")

    def test_get_accepts_names_and_stringified_values(self):
        """
        GIVEN a name, an integer and a stringified integer.
        WHEN they are passed to `get`,
        THEN the matching member is returned.
        """
        self.assertIs(CAResponseDisposition.get("Denied"), CAResponseDisposition.Denied)
        self.assertIs(CAResponseDisposition.get(2), CAResponseDisposition.Denied)
        self.assertIs(CAResponseDisposition.get("2"), CAResponseDisposition.Denied)
        self.assertIs(CertificateRequestType.get("0x20000"), CertificateRequestType.RPC)

    def test_get_rejects_member_of_other_domain(self):
        """
        GIVEN a member of the CAResponseDisposition domain.
        WHEN it is looked up in the CertificateRequestDisposition domain,
        THEN a ValueError is raised instead of comparing the values.
        """
        with self.assertRaises(ValueError):
            CertificateRequestDisposition.get(CAResponseDisposition.Revoked)

    def test_native_name_and_description(self):
        """
        GIVEN members of all domains.
        WHEN the native name and the description are read,
        THEN every member provides both.
        """
        self.assertEqual(CAResponseDisposition.IssuedOutOfBand.native_name, "CR_DISP_ISSUED_OUT_OF_BAND")
        self.assertEqual(CertificateRequestDisposition.KRACert.native_name, "DB_DISP_KRA_CERT")
        self.assertEqual(CertificateRequestType.CRLs.native_name, "CR_IN_CRLS")
        for enum_cls in CODE_ENUMS:
            for member in enum_cls.__members__.values():
                self.assertTrue(member.description, f"{enum_cls.__name__}.{member.name}")
                self.assertTrue(member.native_name, f"{enum_cls.__name__}.{member.name}")


if __name__ == "__main__":
    unittest.main()
