"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from loctable.constants import LOCALE_FAILURE_MESSAGE, PREVIEW_ELLIPSIS, PREVIEW_LENGTH

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate", "shorten"]


def shorten(text: str) -> str:
    """Cap text quoted in an error message at PREVIEW_LENGTH characters.

    When truncation happens, the last characters of the preview are replaced
    by an ellipsis so the result is exactly PREVIEW_LENGTH long.

    Example:
        >>> shorten("greet")
        'greet'
        >>> shorten("a" * 30)
        'aaaaaaaaaaaaaaaaaaaaa...'
    """
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[: PREVIEW_LENGTH - len(PREVIEW_ELLIPSIS)] + PREVIEW_ELLIPSIS


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Lexical
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_character(char: str, span: SourceSpan | None = None) -> Diagnostic:
        """Character that cannot start or continue any token.

        Args:
            char: The offending character
            span: Location of the character

        Returns:
            Diagnostic for INVALID_CHARACTER
        """
        msg = f"Unexpected character {char!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_CHARACTER,
            message=msg,
            span=span,
            hint="Keys end with ':', locales are followed by a quoted value",
        )

    @staticmethod
    def unterminated_value(span: SourceSpan | None = None) -> Diagnostic:
        """Quoted value still open at end of input.

        Args:
            span: Location of the opening quote

        Returns:
            Diagnostic for UNTERMINATED_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_VALUE,
            message="Unexpected end of input before terminating quote",
            span=span,
            hint='Close the value with \'"\'; write \\" for a literal quote',
        )

    @staticmethod
    def name_invalid_start(char: str, span: SourceSpan | None = None) -> Diagnostic:
        """Name starting with a non-alphabetic character.

        Args:
            char: The offending first character

        Returns:
            Diagnostic for NAME_INVALID_START
        """
        msg = f"Key or locale cannot start with {char!r}"
        return Diagnostic(
            code=DiagnosticCode.NAME_INVALID_START,
            message=msg,
            span=span,
            hint="Names must start with an ASCII letter",
        )

    @staticmethod
    def name_invalid_char(char: str, span: SourceSpan | None = None) -> Diagnostic:
        """Name containing a character outside [a-zA-Z0-9_-].

        Args:
            char: The offending character

        Returns:
            Diagnostic for NAME_INVALID_CHAR
        """
        msg = f"Key or locale cannot contain {char!r}"
        return Diagnostic(
            code=DiagnosticCode.NAME_INVALID_CHAR,
            message=msg,
            span=span,
            hint="Names may only contain ASCII letters, digits, '-' and '_'",
        )

    @staticmethod
    def empty_name() -> Diagnostic:
        """Name built from an empty string."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_NAME,
            message="Name cannot be empty",
        )

    @staticmethod
    def unexpected_eof(name: str, span: SourceSpan | None = None) -> Diagnostic:
        """Input ended while a key or locale name was waiting for its delimiter.

        Args:
            name: The name read so far

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected end of input after '{shorten(name)}'"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=span,
            hint="Follow a key with ':' or a locale with a quoted value",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Source text exceeding the configured size limit.

        Args:
            size: Source length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Source is {size} characters long, exceeding the limit of {limit}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Split the table into included files or raise max_source_size",
        )

    # ------------------------------------------------------------------
    # Directive
    # ------------------------------------------------------------------

    @staticmethod
    def empty_directive() -> Diagnostic:
        """Directive line with no directive word."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_DIRECTIVE,
            message="Empty directive",
            hint="Use '!locales <name>...' or '!include <path>...'",
        )

    @staticmethod
    def unknown_directive(word: str) -> Diagnostic:
        """Directive word that is neither 'locales' nor 'include'.

        Args:
            word: The unrecognised directive word

        Returns:
            Diagnostic for UNKNOWN_DIRECTIVE
        """
        msg = f"Unrecognised directive '{shorten(word)}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_DIRECTIVE,
            message=msg,
            hint="Known directives are 'locales' and 'include'",
        )

    @staticmethod
    def missing_values(directive: str) -> Diagnostic:
        """Directive given without any values.

        Args:
            directive: The directive word

        Returns:
            Diagnostic for MISSING_VALUES
        """
        msg = f"Missing values for directive '{directive}'"
        return Diagnostic(
            code=DiagnosticCode.MISSING_VALUES,
            message=msg,
            hint=f"Write at least one value after '!{directive}'",
        )

    @staticmethod
    def duplicate_locale(locale: str) -> Diagnostic:
        """Locale declared twice (after case and separator folding).

        Args:
            locale: The folded locale name

        Returns:
            Diagnostic for DUPLICATE_LOCALE
        """
        msg = f"Duplicate locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_LOCALE,
            message=msg,
            locale=locale,
            hint="Locale names fold case and '-' to '_' before comparison",
        )

    # ------------------------------------------------------------------
    # Structural
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_token(
        token: str, span: SourceSpan | None = None, *, key: str | None = None
    ) -> Diagnostic:
        """Token that cannot appear at this point.

        Args:
            token: Display form of the token
            span: Location of the token
            key: Key being read, if any

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        msg = f"Unexpected token {shorten(token)}"
        if key is not None:
            msg += f" in key '{shorten(key)}'"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=msg,
            key=None if key is None else shorten(key),
            span=span,
            hint='Entries follow the shape: key: locale "value" ...',
        )

    @staticmethod
    def locale_without_key(locale: str, span: SourceSpan | None = None) -> Diagnostic:
        """Locale token at top level.

        Args:
            locale: The locale name

        Returns:
            Diagnostic for LOCALE_WITHOUT_KEY
        """
        msg = f"Encountered locale '{locale}', but no key precedes it"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_WITHOUT_KEY,
            message=msg,
            locale=locale,
            span=span,
            hint="Declare a key with 'name:' before its locale entries",
        )

    @staticmethod
    def value_without_key(value: str, span: SourceSpan | None = None) -> Diagnostic:
        """Value token at top level.

        Args:
            value: The quoted text

        Returns:
            Diagnostic for VALUE_WITHOUT_KEY
        """
        msg = f"Encountered value \"{shorten(value)}\", but no key precedes it"
        return Diagnostic(
            code=DiagnosticCode.VALUE_WITHOUT_KEY,
            message=msg,
            span=span,
            hint="Values must follow a locale inside a key",
        )

    @staticmethod
    def expected_locale(key: str, span: SourceSpan | None = None) -> Diagnostic:
        """Key declared without any locale/value pair.

        Args:
            key: The key id

        Returns:
            Diagnostic for EXPECTED_LOCALE
        """
        msg = f"Key '{shorten(key)}' has no locale entries"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_LOCALE,
            message=msg,
            key=shorten(key),
            span=span,
            hint='Add at least one line like: en "text"',
        )

    @staticmethod
    def expected_value(
        key: str, locale: str, found: str | None, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Locale not followed by a quoted value.

        Args:
            key: The key id
            locale: The locale name
            found: Display form of the token found instead (None at end of input)

        Returns:
            Diagnostic for EXPECTED_VALUE
        """
        found_text = "end of input" if found is None else shorten(found)
        msg = f"Expected a value for locale '{locale}' in key '{shorten(key)}', found {found_text}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_VALUE,
            message=msg,
            key=shorten(key),
            locale=locale,
            span=span,
        )

    @staticmethod
    def undeclared_locale(
        locale: str, key: str, span: SourceSpan | None = None
    ) -> Diagnostic:
        """Locale used in an entry but never declared.

        Args:
            locale: The locale name
            key: The key id

        Returns:
            Diagnostic for UNDECLARED_LOCALE
        """
        msg = f"Encountered locale '{locale}' in key '{shorten(key)}', but it has not been declared"
        return Diagnostic(
            code=DiagnosticCode.UNDECLARED_LOCALE,
            message=msg,
            key=shorten(key),
            locale=locale,
            span=span,
            hint=f"Declare it first with '!locales ... {locale}'",
        )

    @staticmethod
    def source_reincluded(source: str) -> Diagnostic:
        """Source included a second time.

        Args:
            source: The repeated source identifier

        Returns:
            Diagnostic for SOURCE_REINCLUDED
        """
        msg = f"Source '{source}' was already included"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_REINCLUDED,
            message=msg,
            hint="Each file may be included at most once (include cycles are rejected)",
        )

    # ------------------------------------------------------------------
    # Semantic
    # ------------------------------------------------------------------

    @staticmethod
    def no_locales() -> Diagnostic:
        """No locales declared in any compiled source."""
        return Diagnostic(
            code=DiagnosticCode.NO_LOCALES,
            message="There are no locales set up",
            hint="Declare them with '!locales <name>...'",
        )

    @staticmethod
    def missing_locale(key: str, locale: str) -> Diagnostic:
        """Key without an entry for a declared locale.

        Args:
            key: The key id
            locale: The first locale lacking an entry

        Returns:
            Diagnostic for MISSING_LOCALE
        """
        msg = f"Key '{shorten(key)}' is missing locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.MISSING_LOCALE,
            message=msg,
            key=shorten(key),
            locale=locale,
            hint=f"Add a '{locale} \"...\"' line to the key",
        )

    @staticmethod
    def duplicate_entry(key: str, locale: str) -> Diagnostic:
        """Same (key, locale) slot filled twice.

        Args:
            key: The key id
            locale: The locale filled twice

        Returns:
            Diagnostic for DUPLICATE_ENTRY
        """
        msg = f"Duplicate entry for locale '{locale}' in key '{shorten(key)}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_ENTRY,
            message=msg,
            key=shorten(key),
            locale=locale,
        )

    @staticmethod
    def nested_brace(template: str) -> Diagnostic:
        """Opening brace inside an open placeholder.

        Args:
            template: The template text

        Returns:
            Diagnostic for NESTED_BRACE
        """
        msg = f"Value \"{shorten(template)}\" contains a nested opening brace '{{'"
        return Diagnostic(
            code=DiagnosticCode.NESTED_BRACE,
            message=msg,
            hint="Close each placeholder before opening the next one",
        )

    @staticmethod
    def unclosed_brace(template: str) -> Diagnostic:
        """Placeholder still open at the end of the template.

        Reported under NESTED_BRACE with its own message.

        Args:
            template: The template text

        Returns:
            Diagnostic for NESTED_BRACE
        """
        msg = f"Value \"{shorten(template)}\" ends inside a placeholder opened with '{{'"
        return Diagnostic(
            code=DiagnosticCode.NESTED_BRACE,
            message=msg,
            hint="Close the placeholder with '}'",
        )

    @staticmethod
    def extra_closing_brace(template: str) -> Diagnostic:
        """Closing brace without a matching open.

        Args:
            template: The template text

        Returns:
            Diagnostic for EXTRA_CLOSING_BRACE
        """
        msg = f"Value \"{shorten(template)}\" contains an unopened closing brace '}}'"
        return Diagnostic(code=DiagnosticCode.EXTRA_CLOSING_BRACE, message=msg)

    @staticmethod
    def arg_bad_start(template: str, argument: str) -> Diagnostic:
        """Placeholder name neither numeric nor starting alphabetic.

        Args:
            template: The template text
            argument: The placeholder name

        Returns:
            Diagnostic for ARG_BAD_START
        """
        msg = (
            f"Value \"{shorten(template)}\" contains argument \"{shorten(argument)}\" "
            f"that starts with {argument[:1]!r}, but it must start with an "
            "alphabetic character or be a number"
        )
        return Diagnostic(code=DiagnosticCode.ARG_BAD_START, message=msg)

    @staticmethod
    def arg_bad_char(template: str, argument: str, char: str) -> Diagnostic:
        """Placeholder name containing a non-Name character.

        Args:
            template: The template text
            argument: The placeholder name read so far
            char: The offending character

        Returns:
            Diagnostic for ARG_BAD_CHAR
        """
        msg = (
            f"Value \"{shorten(template)}\" contains argument \"{shorten(argument)}\" "
            f"with invalid char {char!r}, but it must be only alphanumeric, '-', or '_'"
        )
        return Diagnostic(code=DiagnosticCode.ARG_BAD_CHAR, message=msg)

    @staticmethod
    def argument_mismatch(
        key: str, locale: str, found: list[str], expected: list[str]
    ) -> Diagnostic:
        """Locale whose placeholders differ from the default locale's.

        Args:
            key: The key id
            locale: The offending locale
            found: Placeholders extracted from the offending template
            expected: Canonical placeholders from the first locale

        Returns:
            Diagnostic for ARGUMENT_MISMATCH
        """
        msg = (
            f"Entry '{locale}' for key '{shorten(key)}' has arguments {found!r}, "
            f"which does not match {expected!r} from the key's first entry"
        )
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_MISMATCH,
            message=msg,
            key=shorten(key),
            locale=locale,
            hint="Every locale must use the same placeholders in the same order",
        )

    @staticmethod
    def parameter_collision(key: str, parameter: str) -> Diagnostic:
        """Named placeholder clashing with a renamed positional one.

        Args:
            key: The key id
            parameter: The parameter name used twice (e.g. "arg0")

        Returns:
            Diagnostic for PARAMETER_COLLISION
        """
        msg = (
            f"Key '{shorten(key)}' uses '{parameter}' both as a named placeholder "
            "and as the name of a positional one"
        )
        return Diagnostic(
            code=DiagnosticCode.PARAMETER_COLLISION,
            message=msg,
            key=shorten(key),
            hint="Rename the named placeholder",
        )

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    @staticmethod
    def source_load_failed(source: str, reason: str) -> Diagnostic:
        """Loader could not read a source.

        Args:
            source: The source identifier
            reason: The underlying error text

        Returns:
            Diagnostic for SOURCE_LOAD_FAILED
        """
        msg = f"Could not read source '{source}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_LOAD_FAILED,
            message=msg,
            source=source,
        )

    @staticmethod
    def locale_lock_failed(operation: str) -> Diagnostic:
        """Current-locale lock not acquired in time.

        Args:
            operation: 'get' or 'set'

        Returns:
            Diagnostic for LOCALE_LOCK_FAILED
        """
        msg = f"{LOCALE_FAILURE_MESSAGE} ({operation})"
        return Diagnostic(code=DiagnosticCode.LOCALE_LOCK_FAILED, message=msg)

    @staticmethod
    def unknown_locale(locale: str) -> Diagnostic:
        """Locale not part of the compiled enumeration.

        Args:
            locale: The requested locale

        Returns:
            Diagnostic for UNKNOWN_LOCALE
        """
        msg = f"Locale '{shorten(locale)}' is not declared"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            locale=locale,
        )

    @staticmethod
    def unknown_key(key: str) -> Diagnostic:
        """Key not present in the compiled table.

        Args:
            key: The requested key

        Returns:
            Diagnostic for UNKNOWN_KEY
        """
        msg = f"Key '{shorten(key)}' not found"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_KEY,
            message=msg,
            key=shorten(key),
        )
