import pytest

from no2cc.types import LVar, Node, NodeKind, Token, TokenKind


def test_num_node():
    node = Node.num(5)
    assert node.kind is NodeKind.NUM
    assert node.val == 5
    assert node.lhs is None and node.rhs is None


def test_lvar_node():
    node = Node.lvar(16, "foo")
    assert node.kind is NodeKind.LVAR
    assert node.offset == 16
    assert node.ident_name == "foo"


def test_if_node_without_else():
    cond = Node.num(1)
    then = Node.num(2)
    node = Node.if_(cond, then, None)
    assert node.kind is NodeKind.IF
    assert node.cond == cond
    assert node.then == then
    assert node.els is None


def test_if_node_with_else():
    node = Node.if_(Node.num(1), Node.num(2), Node.num(3))
    assert node.els == Node.num(3)


def test_block_node_copies_statements():
    stmts = [Node.num(1), Node.num(2)]
    node = Node.block(stmts)
    stmts.append(Node.num(3))
    assert node.kind is NodeKind.BLOCK
    assert node.stmts == [Node.num(1), Node.num(2)]


def test_call_node():
    node = Node.call("foo")
    assert node.kind is NodeKind.FN
    assert node.fn_name == "foo"


@pytest.mark.parametrize(
    "node",
    [
        Node.block([]),
        Node(NodeKind.RETURN, lhs=Node.num(1)),
        Node.if_(Node.num(1), Node.num(2), None),
        Node.call("f"),
    ],
)
def test_statement_kinds(node):
    assert node.is_statement() is True


@pytest.mark.parametrize(
    "node",
    [
        Node.num(1),
        Node.lvar(8, "a"),
        Node(NodeKind.ADD, lhs=Node.num(1), rhs=Node.num(2)),
        Node(NodeKind.ASSIGN, lhs=Node.lvar(8, "a"), rhs=Node.num(2)),
    ],
)
def test_expression_kinds(node):
    assert node.is_statement() is False


def test_token_default_value():
    tok = Token(TokenKind.IDENT, "foo", 3, 1)
    assert tok.val is None
    assert tok == Token(TokenKind.IDENT, "foo", 3, 1, None)


def test_lvar_equality():
    assert LVar("a", 1, 8) == LVar("a", 1, 8)
    assert LVar("a", 1, 8).offset == 8