"""
Parsing behavioral tests (help blocks, parameter blocks, reconciliation, records).

Scope
- Validate help-block sectioning, example splitting and parameter-name hints.
- Validate parameter-block attribute extraction, type folding and skipping rules.
- Validate reconciliation of hints against declarations.
- Validate command-name derivation and the full parse_command pipeline.
- Validate that malformed input degrades to defaults with a warning.

Conventions
- Test method names follow CamelCase per project convention.
- Warnings are captured with warnings.catch_warnings(record=True).
"""
import textwrap
import unittest
import warnings
from unittest import TestCase

from cmdlore import (
    CatalogConfig,
    ParameterDeclaration,
    ParameterType,
    parse_help_block,
    parse_parameter_block,
    reconcile_parameters,
    derive_command_name,
    normalize_type,
    parse_command,
)
from cmdlore.faults import AmbiguousTypeWarning, NoCommandNameWarning, StructuralParseWarning

SCRIPT = textwrap.dedent("""\
    function Get-Thing {
        <#
        .SYNOPSIS
            Gets a thing.

        .DESCRIPTION
            Retrieves a sample thing
            from the store.

        .PARAMETER Name
            The name of the thing.

        .PARAMETER Verbose
            Show more.

        .PARAMETER None
            Nothing to see.

        .EXAMPLE
            Get-Thing -Name alpha
            Name : alpha

        .EXAMPLE
            Get-Thing beta
        #>
        [CmdletBinding()]
        param(
            [Parameter(Mandatory=$true, Position=0)]
            [ValidateNotNullOrEmpty()]
            [string]$Name,

            [Parameter(Position = 1)]
            [int]$Count = 3,

            [switch]$Force
        )
        if ($Verbose) { Write-Host $Name }
    }
""")


def _parse_quietly(function, *args):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return function(*args)


class TestHelpBlock(TestCase):

    def testSections(self):
        block = parse_help_block(SCRIPT)
        self.assertEqual(block.synopsis, "Gets a thing.")
        self.assertEqual(block.description, "Retrieves a sample thing\n        from the store.")

    def testEachExampleHeaderStartsABlock(self):
        block = parse_help_block(SCRIPT)
        self.assertEqual(block.examples, (
            "Get-Thing -Name alpha\n        Name : alpha",
            "Get-Thing beta",
        ))

    def testNumberedExamples(self):
        block = parse_help_block("<#\n.EXAMPLE1\nfirst\n.Example2\nsecond\n.EXAMPLE3\n\n#>")
        self.assertEqual(block.examples, ("first", "second"))

    def testHintsSkipJunkWords(self):
        self.assertEqual(parse_help_block(SCRIPT).hints, ("Name", "Verbose"))

    def testHintsDeduplicatedCaseInsensitively(self):
        block = parse_help_block("<#\n.PARAMETER Path\n.parameter PATH the path\n.PARAMETER n/a\n.PARAMETER\n#>")
        self.assertEqual(block.hints, ("Path",))

    def testHintTakesFirstWordOfHeaderLine(self):
        block = parse_help_block("<#\n.PARAMETER ComputerName The computer to query\n#>")
        self.assertEqual(block.hints, ("ComputerName",))

    def testMissingBlockYieldsDefaults(self):
        block = parse_help_block("function Get-Thing { }")
        self.assertEqual((block.synopsis, block.description, block.examples, block.hints), ("", "", (), ()))

    def testOnlyFirstBlockIsRead(self):
        block = parse_help_block("<#\n.SYNOPSIS\nfirst\n#>\n<#\n.SYNOPSIS\nsecond\n#>")
        self.assertEqual(block.synopsis, "first")

    def testTrailingWhitespaceTrimmedPerLine(self):
        block = parse_help_block("<#\n.DESCRIPTION\n\n  line one   \nline two\t\n\n#>")
        self.assertEqual(block.description, "line one\nline two")


class TestParameterBlock(TestCase):

    def testSpecExampleRoundTrip(self):
        parameters = parse_parameter_block("param([Parameter(Mandatory=$true, Position=0)][string]$Name)")
        self.assertEqual(parameters, (ParameterDeclaration("Name", required=True, type="String", position=0),))

    def testFullScript(self):
        self.assertEqual(parse_parameter_block(SCRIPT), (
            ParameterDeclaration("Name", required=True, type=ParameterType.STRING, position=0),
            ParameterDeclaration("Count", required=False, type=ParameterType.INT32, position=1),
            ParameterDeclaration("Force", required=False, type=ParameterType.SWITCH, position=-1),
        ))

    def testOneDeclarationPerEntry(self):
        text = "param($A, $B = 'x,y', [int[]]$C = @(1, 2), $D = (Get-Date))"
        self.assertEqual([parameter.name for parameter in parse_parameter_block(text)], ["A", "B", "C", "D"])

    def testBareMandatoryImpliesTrue(self):
        (parameter,) = parse_parameter_block("param([Parameter(Mandatory)]$Path)")
        self.assertTrue(parameter.required)

    def testExplicitMandatoryFalse(self):
        (parameter,) = parse_parameter_block("param([Parameter(Mandatory = $false)]$Path)")
        self.assertFalse(parameter.required)

    def testNegativePosition(self):
        (parameter,) = parse_parameter_block("param([Parameter(Position=-2)]$Path)")
        self.assertEqual(parameter.position, -2)

    def testSpecialVariablesAreNotNames(self):
        text = "param([Parameter(Mandatory=$true)][ValidateScript({ $_ -and $PSItem })]$Target = $null)"
        (parameter,) = parse_parameter_block(text)
        self.assertEqual(parameter.name, "Target")

    def testEntriesWithoutVariablesAreSkipped(self):
        text = "param($Path = $env:TEMP, $true, [switch]$Force)"
        self.assertEqual([parameter.name for parameter in parse_parameter_block(text)], ["Path", "Force"])

    def testLastTypeGroupWins(self):
        (parameter,) = parse_parameter_block("param([object][bool]$Enabled)")
        self.assertIs(parameter.type, ParameterType.BOOLEAN)

    def testAttributeGroupsAreNotTypes(self):
        text = "param([Alias('CN')][AllowNull()][ValidateSet('a','b')]$Computer)"
        (parameter,) = parse_parameter_block(text)
        self.assertIs(parameter.type, ParameterType.OBJECT)

    def testArrayTypeFolds(self):
        (parameter,) = parse_parameter_block("param([string[]]$Names)")
        self.assertIs(parameter.type, ParameterType.STRING)

    def testUnknownTypeIsKeptAndWarns(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            (parameter,) = parse_parameter_block("param([datetime]$When)")
        self.assertEqual(parameter.type, "datetime")
        self.assertTrue(any(issubclass(warning.category, AmbiguousTypeWarning) for warning in caught))

    def testCaseInsensitiveOpener(self):
        self.assertEqual(len(parse_parameter_block("PARAM ( $x )")), 1)

    def testAbsentBlock(self):
        self.assertEqual(parse_parameter_block("Write-Host 'no parameters here'"), ())

    def testUnbalancedBlockWarnsAndYieldsNothing(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.assertEqual(parse_parameter_block("param([string]$Name, ($Other"), ())
        self.assertTrue(any(issubclass(warning.category, StructuralParseWarning) for warning in caught))

    def testDuplicatesAreKeptByTheParser(self):
        self.assertEqual(len(parse_parameter_block("param($Name, $name)")), 2)


class TestNormalizeType(TestCase):

    def testFamilies(self):
        self.assertIs(normalize_type("switch"), ParameterType.SWITCH)
        self.assertIs(normalize_type("System.Management.Automation.SwitchParameter"), ParameterType.SWITCH)
        self.assertIs(normalize_type("Nullable[bool]"), ParameterType.BOOLEAN)
        self.assertIs(normalize_type("Int64"), ParameterType.INT32)
        self.assertIs(normalize_type("System.String"), ParameterType.STRING)

    def testEmptyIsObject(self):
        self.assertIs(normalize_type(""), ParameterType.OBJECT)
        self.assertIs(normalize_type("  "), ParameterType.OBJECT)


class TestReconcile(TestCase):

    def testHintWithVariableIsAdded(self):
        parameters = reconcile_parameters(
            [ParameterDeclaration("Name", position=0)],
            ["Verbose"],
            "if ($verbose) { }",
        )
        self.assertEqual(parameters, (
            ParameterDeclaration("Verbose", type=ParameterType.STRING),
            ParameterDeclaration("Name", position=0),
        ))

    def testHintWithoutVariableIsDropped(self):
        self.assertEqual(reconcile_parameters([], ["Verbose"], "Write-Host Verbose"), ())

    def testHintMatchesWholeVariableOnly(self):
        self.assertEqual(reconcile_parameters([], ["Path"], "$PathList"), ())

    def testHintAlreadyDeclaredIsIgnored(self):
        declared = ParameterDeclaration("Name", required=True, type="Int32", position=0)
        self.assertEqual(reconcile_parameters([declared], ["NAME"], "$Name"), (declared,))

    def testDuplicateDeclarationsCollapse(self):
        parameters = reconcile_parameters(
            [ParameterDeclaration("Name"), ParameterDeclaration("Other"), ParameterDeclaration("name", required=True)],
            [],
            "",
        )
        self.assertEqual(parameters, (ParameterDeclaration("name", required=True), ParameterDeclaration("Other")))

    def testStableSort(self):
        parameters = reconcile_parameters(
            [
                ParameterDeclaration("C", position=1),
                ParameterDeclaration("A", position=0),
                ParameterDeclaration("B", position=0),
                ParameterDeclaration("D"),
            ],
            [],
            "",
        )
        self.assertEqual([parameter.name for parameter in parameters], ["D", "A", "B", "C"])


class TestCommandName(TestCase):

    def testFunctionName(self):
        self.assertEqual(derive_command_name(SCRIPT, "fallback.ps1"), "Get-Thing")

    def testFunctionKeywordIsCaseInsensitive(self):
        self.assertEqual(derive_command_name("Function Set-Thing { }", "x.ps1"), "Set-Thing")

    def testFallbackStripsExtension(self):
        self.assertEqual(derive_command_name("Write-Host hi", "Invoke-Cleanup.PS1"), "Invoke-Cleanup")

    def testFunctionAfterLongHelpBlock(self):
        text = "<#\n.SYNOPSIS\n" + "Long description line.\n" * 100 + "#>\nfunction Get-Real { }"
        self.assertEqual(derive_command_name(text, "helper.ps1"), "Get-Real")

    def testFunctionOnLateLine(self):
        text = "#" * 2500 + "\nfunction Late-Name { }"
        self.assertEqual(derive_command_name(text, "Early.ps1"), "Late-Name")

    def testFunctionFarIntoOneLineIsIgnored(self):
        text = "#" * 2500 + " function Buried { }"
        self.assertEqual(derive_command_name(text, "Early.ps1"), "Early")

    def testNoName(self):
        self.assertEqual(derive_command_name("Write-Host hi"), "")


class TestParseCommand(TestCase):

    def setUp(self):
        self.config = CatalogConfig("functions", depth=2)

    def testFullRecord(self):
        record = _parse_quietly(parse_command, self.config, SCRIPT, "functions/Inventory/Get-Thing.ps1")
        self.assertEqual(record.name, "Get-Thing")
        self.assertEqual(record.invocation, "Get-Thing")
        self.assertEqual(record.category, "Inventory")
        self.assertEqual(record.synopsis, "Gets a thing.")
        self.assertEqual(len(record.examples), 2)
        self.assertEqual(record.path, "functions/Inventory/Get-Thing.ps1")
        self.assertEqual([parameter.name for parameter in record.parameters], ["Force", "Verbose", "Name", "Count"])

    def testFallbackName(self):
        record = parse_command(self.config, "Write-Host hi", "functions/Say-Hi.ps1")
        self.assertEqual(record.name, "Say-Hi")
        self.assertEqual(record.parameters, ())

    def testNoNameYieldsNoneAndWarns(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.assertIsNone(parse_command(self.config, "Write-Host hi", "functions/.ps1"))
        self.assertTrue(any(issubclass(warning.category, NoCommandNameWarning) for warning in caught))

    def testMalformedScriptStillYieldsRecord(self):
        text = "function Get-Broken {\n<#\n.SYNOPSIS\nBroken\n#>\nparam([string]$Name, 'unterminated\n}"
        record = _parse_quietly(parse_command, self.config, text, "functions/Get-Broken.ps1")
        self.assertEqual(record.name, "Get-Broken")
        self.assertEqual(record.synopsis, "Broken")
        self.assertEqual(record.parameters, ())


if __name__ == "__main__":
    unittest.main()
