import pytest
from riscv_mini_asm.parser import parse
from riscv_mini_asm.ast import Instruction, LabelDef
from riscv_mini_asm.isa import Kind
from riscv_mini_asm.diagnostics import ErrorKind

SRC = """
// programa mÃ­nimo
start:
    add  x1, x2, x3     // suma
    ld   x5, 40(x6)

loop :
    beq  x1, x0, loop
    blt  x1, x2, done   // referencia hacia delante
done:
"""

def test_parse_program():
    nodes, diags = parse(SRC, filename="prog.s")
    assert not diags
    kinds = [type(n).__name__ for n in nodes]
    assert kinds == ["LabelDef", "Instruction", "Instruction", "LabelDef",
                     "Instruction", "Instruction", "LabelDef"]

    labels = {n.name: n.index for n in nodes if isinstance(n, LabelDef)}
    assert labels == {"start": 0, "loop": 2, "done": 4}

    insts = [n for n in nodes if isinstance(n, Instruction)]
    assert [i.index for i in insts] == [0, 1, 2, 3]
    assert [i.kind for i in insts] == [Kind.ADD, Kind.LOAD, Kind.BRANCH_EQ, Kind.BRANCH_LT]
    assert [i.ref for i in insts] == [None, None, "loop", "done"]
    assert insts[0].line == 4
    assert insts[0].text == "add  x1, x2, x3     // suma"

def test_branch_word_has_no_immediate_yet():
    nodes, _ = parse("blt x3, x4, far")
    (ins,) = nodes
    assert ins.word == (4 << 20) | (3 << 15) | (0b100 << 12) | 0b1100011

@pytest.mark.parametrize("line", [
    "  add   x1 ,x2,   x3  // suma",
    "add x1 x2 x3",
    "add\tx1,\tx2,\tx3",
])
def test_whitespace_and_separators_are_insignificant(line):
    nodes, diags = parse(line)
    assert not diags
    assert nodes[0].word == (3 << 20) | (2 << 15) | (1 << 7) | 0b0110011

def test_memory_operand_spacing():
    a, _ = parse("ld x5,40( x6 )")
    b, _ = parse("ld x5, 40(x6)")
    assert a[0].word == b[0].word

@pytest.mark.parametrize("line", [
    "mul x1, x2, x3",
    "add x1, x2",
    "add x1, x2, x3, x4",
    "add a0, a1, a2",
    "ld x5, -4(x6)",
    "ld x5, 40 x6",
    "beq x1, x2",
    "nop x1",
    "loop: nop",
    "x1:x2",
    "ADD x1, x2, x3",
    "Nop",
    "ld x\u0661, 4(x2)",
    "nop\x0cadd x1, x2, x3",
])
def test_unrecognized_line(line):
    src = f"nop\n{line}\nnop\n"
    nodes, diags = parse(src, filename="bad.s")
    assert len(diags) == 1
    d = diags[0]
    assert d.severity == "error"
    assert d.kind is ErrorKind.UNRECOGNIZED_LINE
    assert d.line == 2 and d.file == "bad.s"
    assert d.text == line
    assert line in d.message
    # la lÃ­nea mala no consume Ã­ndice
    assert [n.index for n in nodes] == [0, 1]

@pytest.mark.parametrize("line, fragment", [
    ("add x32, x1, x2", "x32"),
    ("sd x1, 4096(x2)", "4096"),
    ("ld x1, 0(x99)", "x99"),
])
def test_out_of_range_operands(line, fragment):
    nodes, diags = parse(line)
    assert [d.kind for d in diags] == [ErrorKind.OPERAND_OUT_OF_RANGE]
    assert fragment in diags[0].message
    # el nodo se conserva para no desplazar Ã­ndices
    assert len(nodes) == 1

def test_out_of_range_accepted_without_checks():
    nodes, diags = parse("add x32, x1, x2", check_ranges=False)
    assert not diags and len(nodes) == 1

def test_comments_and_blank_lines_only():
    nodes, diags = parse("\n   \n// nada\n\t// tampoco\n")
    assert nodes == [] and diags == []

def test_mnemonics_are_case_sensitive():
    nodes, diags = parse("ADD x1, x2, x3\nNop\nnop\n")
    assert [d.kind for d in diags] == [ErrorKind.UNRECOGNIZED_LINE] * 2
    assert [d.line for d in diags] == [1, 2]
    assert [n.kind for n in nodes] == [Kind.NOP]

def test_only_newline_separates_lines():
    # \f no parte la línea: queda 'nop' con operandos y se rechaza
    nodes, diags = parse("nop\x0cadd x1, x2, x3\nsub x1, x2, x3\n")
    assert [d.kind for d in diags] == [ErrorKind.UNRECOGNIZED_LINE]
    assert diags[0].line == 1
    assert [(n.kind, n.line) for n in nodes] == [(Kind.SUB, 2)]

def test_crlf_line_endings():
    nodes, diags = parse("L:\r\nadd x1, x2, x3\r\nbeq x1, x2, L\r\n")
    assert not diags
    assert [n.text for n in nodes] == ["L:", "add x1, x2, x3", "beq x1, x2, L"]
    assert nodes[2].ref == "L"

def test_non_ascii_digits_are_not_registers():
    _, diags = parse("add x\u0661, x2, x3\n")
    assert [d.kind for d in diags] == [ErrorKind.UNRECOGNIZED_LINE]
