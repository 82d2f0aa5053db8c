"""
Utilidades compartidas del dominio.

Estas funciones son usadas por varios decodificadores y no dependen
de ninguna librería externa. Solo operan sobre tipos nativos de Python.

Uso:
    from treasury_statements.domain.shared.money import parse_minor_units, parse_swift_amount
    from treasury_statements.domain.shared.date_parser import parse_yymmdd, parse_mmdd
    from treasury_statements.domain.shared.bai2_codes import is_credit_code, describe_code
    from treasury_statements.domain.shared.text_cleaner import clean_whitespace, join_narrative
"""
