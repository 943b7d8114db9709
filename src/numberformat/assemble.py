"""Final string assembly.

The assembler walks the positive or negative template of a pattern and
turns every token into text through one dispatch table keyed by
:class:`~numberformat.patterns.compiler.TokenKind`. Padding is applied at
the pad token's position, and transliteration to the target number system
happens last, on the whole string.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from numberformat.exceptions import MissingCurrencyError
from numberformat.patterns.compiler import PatternMetadata, Token, TokenKind
from numberformat.protocols import (
    Currency,
    LocaleInfo,
    NumberSymbols,
    PluralRuleSelector,
    Transliterator,
)
from numberformat.render import DigitRecord


@dataclass(frozen=True)
class AssemblyContext:
    """Locale-dependent inputs of one assembly.

    Attributes:
        symbols: Symbols of the target number system.
        locale: Locale being formatted for.
        number_system: Target number system id.
        currency: Localized currency, required by currency placeholders.
        number: The number as passed by the caller, before rounding. Used to
            pick the plural form of currency display names.
    """

    symbols: NumberSymbols
    locale: LocaleInfo
    number_system: str = "latn"
    currency: Currency | None = None
    number: int | float | Decimal = 0


Handler = Callable[[Token, str, AssemblyContext], str]


class Assembler:
    """Builds the final string from a digit record and pattern templates.

    Example:
        assembler = Assembler(DigitTransliterator(), CLDRPluralRules())
        assembler.assemble(record, meta, AssemblyContext(symbols, locale))
    """

    def __init__(self, transliterator: Transliterator, plural_rules: PluralRuleSelector) -> None:
        self._transliterator = transliterator
        self._plural_rules = plural_rules
        self._handlers: dict[TokenKind, Handler] = {
            TokenKind.NUMBER: self._number,
            TokenKind.LITERAL: self._verbatim,
            TokenKind.QUOTED: self._verbatim,
            TokenKind.PLUS: self._plus,
            TokenKind.MINUS: self._minus,
            TokenKind.PERCENT: self._percent,
            TokenKind.PERMILLE: self._permille,
            TokenKind.CURRENCY: self._currency,
            TokenKind.PAD: self._pad,
        }

    def assemble(self, record: DigitRecord, meta: PatternMetadata, context: AssemblyContext) -> str:
        """Render ``record`` through the template selected by its sign.

        Raises:
            MissingCurrencyError: If the pattern has a currency placeholder
                and ``context.currency`` is None.
        """
        if meta.has_currency and context.currency is None:
            raise MissingCurrencyError(meta.pattern)

        number = self.number_text(record, meta, context.symbols)
        parts: list[str] = []
        pad_index: int | None = None
        for token in meta.templates.for_sign(record.sign.is_negative):
            if token.kind is TokenKind.PAD:
                pad_index = len(parts)
            parts.append(self._handlers[token.kind](token, number, context))

        if meta.padding.length and pad_index is not None:
            shortfall = meta.padding.length - len("".join(parts))
            if shortfall > 0:
                parts[pad_index] = meta.padding.char * shortfall

        return self._transliterator.transliterate("".join(parts), context.locale, context.number_system)

    @staticmethod
    def number_text(record: DigitRecord, meta: PatternMetadata, symbols: NumberSymbols) -> str:
        """Join integer, fraction and exponent with locale symbols."""
        text = record.integer
        if record.fraction:
            text += symbols.decimal + record.fraction
        if record.exponent is not None and meta.exponent is not None:
            exponent = record.exponent
            if exponent < 0:
                sign = symbols.minus_sign
            elif meta.exponent.show_plus:
                sign = symbols.plus_sign
            else:
                sign = ""
            text += symbols.exponential + sign + str(abs(exponent)).zfill(meta.exponent.min_digits)
        return text

    # -------------------------------------------------------------------------
    # Token handlers
    # -------------------------------------------------------------------------

    def _number(self, token: Token, number: str, context: AssemblyContext) -> str:
        return number

    def _verbatim(self, token: Token, number: str, context: AssemblyContext) -> str:
        return token.value

    def _plus(self, token: Token, number: str, context: AssemblyContext) -> str:
        return context.symbols.plus_sign

    def _minus(self, token: Token, number: str, context: AssemblyContext) -> str:
        return context.symbols.minus_sign

    def _percent(self, token: Token, number: str, context: AssemblyContext) -> str:
        return context.symbols.percent_sign

    def _permille(self, token: Token, number: str, context: AssemblyContext) -> str:
        return context.symbols.permille

    def _pad(self, token: Token, number: str, context: AssemblyContext) -> str:
        # Filled in by assemble() once the rest of the string is known.
        return ""

    def _currency(self, token: Token, number: str, context: AssemblyContext) -> str:
        currency = context.currency
        if currency is None:
            raise MissingCurrencyError(token.value)
        if token.width == 2:
            return currency.iso_code
        if token.width == 3:
            category = self._plural_rules.category_for(context.number, context.locale)
            return currency.display_name(category)
        if token.width == 5:
            return currency.narrow_symbol or currency.symbol
        return currency.symbol

