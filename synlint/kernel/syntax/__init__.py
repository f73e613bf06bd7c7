"""Syntax tree model consumed by the rule engine."""

from synlint.kernel.syntax.nodes import (
    Argument,
    ArrayExpr,
    Attribute,
    Binary,
    BooleanLiteral,
    CaseCondition,
    Call,
    Closure,
    CodeBlock,
    Expr,
    ForLoop,
    FunctionDecl,
    GuardStmt,
    Identifier,
    IdentifierPattern,
    IfConfigClause,
    IfConfigDecl,
    IfStmt,
    ImportDecl,
    IsPattern,
    MemberAccess,
    NilLiteral,
    Node,
    NodeKind,
    NumberLiteral,
    Parameter,
    Pattern,
    Postfix,
    Prefix,
    ReturnStmt,
    SourceFile,
    StringLiteral,
    Subscript,
    SwitchCase,
    SwitchStmt,
    SyntaxNode,
    SyntaxTree,
    line_and_column,
    Ternary,
    TupleExpr,
    TuplePattern,
    TypeDecl,
    TypeReference,
    ValueBindingPattern,
    VariableDecl,
    WhileStmt,
    WildcardPattern,
)
from synlint.kernel.syntax.traversal import walk

__all__ = [
    "Argument",
    "ArrayExpr",
    "Attribute",
    "Binary",
    "BooleanLiteral",
    "CaseCondition",
    "Call",
    "Closure",
    "CodeBlock",
    "Expr",
    "ForLoop",
    "FunctionDecl",
    "GuardStmt",
    "Identifier",
    "IdentifierPattern",
    "IfConfigClause",
    "IfConfigDecl",
    "IfStmt",
    "ImportDecl",
    "IsPattern",
    "MemberAccess",
    "NilLiteral",
    "Node",
    "NodeKind",
    "NumberLiteral",
    "Parameter",
    "Pattern",
    "Postfix",
    "Prefix",
    "ReturnStmt",
    "SourceFile",
    "StringLiteral",
    "Subscript",
    "SwitchCase",
    "SwitchStmt",
    "SyntaxNode",
    "SyntaxTree",
    "line_and_column",
    "Ternary",
    "TupleExpr",
    "TuplePattern",
    "TypeDecl",
    "TypeReference",
    "ValueBindingPattern",
    "VariableDecl",
    "WhileStmt",
    "WildcardPattern",
    "walk",
]
