"""
Faults module tests (codes, rendering, trigger, contract violations).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase, mock

from declargs import (
    ArgumentsExit,
    ContractError,
    FaultCode,
    MissingRequiredError,
    UnknownArgumentError,
    trigger,
    violate,
)

from support import RecordingPrinter


class TestFaultCode(TestCase):
    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_ARGUMENT.normalize(), "21101")

    def testNormalizeHonorsHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.UNKNOWN_ARGUMENT: "E-UNKNOWN"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_ARGUMENT.normalize(), "E-UNKNOWN")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


class TestArgumentsException(TestCase):
    def testCodeComesFromClass(self):
        self.assertIs(UnknownArgumentError("x").code, FaultCode.UNKNOWN_ARGUMENT)

    def testCodeOverride(self):
        self.assertIs(UnknownArgumentError("x", code=FaultCode.MISSING_VALUE).code, FaultCode.MISSING_VALUE)

    def testPlainRendering(self):
        fault = UnknownArgumentError('unknown argument "--x"', prog="tool")
        self.assertEqual(fault.__rich__().plain, 'Error: unknown argument "--x"\nTry: tool --help')

    def testRenderingWithoutHint(self):
        fault = UnknownArgumentError("boom", prog="tool", hint=False)
        self.assertEqual(fault.__rich__().plain, "Error: boom")

    def testColorfulRenderingShowsCode(self):
        fault = UnknownArgumentError("boom", prog="tool", colorful=True)
        self.assertEqual(fault.__rich__().plain, "Error [21101]: boom\nTry: tool --help")

    def testReplaceKeepsMessageAndMergesOptions(self):
        fault = copy.replace(UnknownArgumentError("boom", token="--x"), prog="tool")
        self.assertEqual(fault.message, "boom")
        self.assertEqual(fault.options["token"], "--x")
        self.assertEqual(fault.options["prog"], "tool")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            UnknownArgumentError("boom").options["prog"] = "tool"


class TestTrigger(TestCase):
    def testTriggerPrintsToErrorStream(self):
        printer = RecordingPrinter()
        trigger(UnknownArgumentError("boom"), prog="tool", printer=printer, colorful=False)
        self.assertEqual(printer.stderr, ["Error: boom\nTry: tool --help"])
        self.assertEqual(printer.stdout, [])

    def testGroupPrintsOneHint(self):
        printer = RecordingPrinter()
        group = ArgumentsExit([MissingRequiredError("a missing"), MissingRequiredError("b missing")])
        trigger(group, prog="tool", printer=printer, colorful=False)
        self.assertEqual(printer.stderr, ["Error: a missing\nError: b missing\nTry: tool --help"])

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())


class TestViolate(TestCase):
    def testViolateReportsThenRaises(self):
        printer = RecordingPrinter()
        with self.assertRaises(ContractError) as context:
            violate(printer, "declare", "bad name")
        self.assertEqual(printer.err, "declargs error: declare: bad name")
        self.assertEqual(context.exception.operation, "declare")
        self.assertEqual(context.exception.reason, "bad name")
        self.assertIs(context.exception.code, FaultCode.CONTRACT_VIOLATION)

    def testContractErrorIsAssertionError(self):
        self.assertTrue(issubclass(ContractError, AssertionError))


if __name__ == "__main__":
    unittest.main()
