# gentools

`gentools` is a library with two parts:

1. **Flag parsing primitives.** These are the building blocks of a command-line parser: strict value parsers, typed flag arguments, flags with short and long tokens, and deferred flag events.
2. **A serialization code generation pipeline.** It takes descriptions of annotated record types and produces serialization code, collected per source file and per output format, from plugins that you register.

The package has no dependencies outside the standard library.

## Parsing values

`gentools.parse_functions` turns strings into typed values. Two exceptions cover the failures, and both are subclasses of `ValueError`:

- Malformed input raises `InvalidArgumentError`.
- A value that does not fit the target type raises `OutOfRangeError`.

```python
from gentools.parse_functions import (
    OutOfRangeError,
    parse_int32,
    parse_uint64,
    parse_double,
    string_to_bool,
    parse_string_delimited,
)

parse_int32("-0xff")                     # -255
parse_uint64("18446744073709551615")     # 18446744073709551615
parse_double("3.14159e-4")               # 0.000314159
string_to_bool("Yes")                    # True
parse_string_delimited('"Test String"')  # 'Test String'

try:
    parse_int32("2147483648")
except OutOfRangeError:
    ...
```

### Integer parsers

The integer parsers are `parse_int32`, `parse_uint32`, `parse_int64` and `parse_uint64`.

- They accept decimal digits or `0x`/`0X` hexadecimal, with an optional sign.
- They check the result against the range of the named type.

### Real-number parsers

The real-number parsers are `parse_float`, `parse_double` and `parse_long_double`.

- They accept decimal and hexadecimal literals, as well as `inf` and `nan`.
- They raise `OutOfRangeError` when the value overflows.
- They also raise `OutOfRangeError` when a non-zero literal underflows to zero.
- `parse_float` rounds its result to single precision.
- `parse_long_double` returns an ordinary Python `float`.

### Boolean parsers

Letter case is ignored by all of them.

| Function | Accepted values |
|---|---|
| `yes_no_to_bool` | yes / no |
| `true_false_to_bool` | true / false |
| `tf_to_bool` | t / f |
| `one_zero_to_bool` | 1 / 0 |
| `string_to_bool` | any of the above |

### String parsers

- `parse_string_delimited` requires the text to begin and end with a double quote, and returns what lies between them.
- `parse_string` returns text unchanged and decodes UTF-8 bytes.

## Flag arguments

`gentools.flag_argument` holds what a flag parses into. It offers three kinds of argument:

- `ValueArgument(value, parse_function, value_type)` keeps the value itself.
  - If you give a type but no value, the value starts as that type's default, so `ValueArgument(value_type=int)` holds `0`.
- `LinkedArgument(target, parse_function, value_type)` writes the parsed value into a `Ref` that you own.
- `VoidArgument` holds nothing. Switches use it.

Each argument has these members:

- `parse(text)` raises whatever the parse function raises.
- `try_parse(text)` returns `False` instead of raising, and leaves the message in `last_error`.
- `value` gives the current value.
- `arg_type()` names the held type.

The setters return the argument, so calls can be chained.

```python
from gentools.flag_argument import LinkedArgument, Ref, ValueArgument
from gentools.parse_functions import parse_int32

count = ValueArgument(0, parse_int32)
count.parse("42")
count.value                 # 42

target = Ref(0)
LinkedArgument(target, parse_int32).parse("7")
target.value                # 7
```

## Flags

`gentools.flag.Tokens` collects the names of a flag:

- A one-character token is the short token.
- Longer tokens become long tokens.
- A second short token replaces the first and issues a warning.
- An empty token raises `EmptyTokenError`.

`Flag(tokens, description, argument=None, arg_required=None, flag_required=False, pos_parsable=False)` accepts its tokens in any of these forms: a `Tokens`, a single string, or an iterable of strings.

How `arg_required` is decided:

- If you pass it, the flag uses that value.
- If you leave it as `None` and give an argument, the argument is required.
- If you leave it as `None` and give no argument, the argument is not required.

A flag's `name` is its first long token. If it has no long token, `name` is the short token.

### Raising a flag

`raise_args(args, position)` parses `args[position]` and returns the position after it. It behaves as follows:

- If the flag has no argument set, it raises `FlagArgumentNotSetError`.
- If the position is past the end, it raises `InvalidArgumentError` when the argument is required. Otherwise it returns the position unchanged.
- If parsing raises `InvalidArgumentError`, the error propagates when the argument is required. Otherwise the position is returned unchanged.

`try_raise_args(args, position)` returns `(succeeded, next_position)` and leaves any message in `last_error`.

```python
from gentools.flag import Flag, make_flags_position_parsable
from gentools.flag_argument import ValueArgument
from gentools.parse_functions import parse_string

out_file = Flag(["f", "out-file"], "File to save to", ValueArgument("", parse_string))
args = ["prog", "-f", "/tmp/key.pub"]
position = out_file.raise_args(args, 2)   # 3
out_file.argument.value                   # '/tmp/key.pub'

make_flags_position_parsable(out_file)
out_file.pos_parsable                     # True
```

### Setting a flag's properties

The setters `set_flag_required`, `set_arg_required`, `set_pos_parsable` and `set_argument` all return the flag.

When a flag that is already required is made position-parsable, its argument becomes required as well.

## Flag events

`gentools.flag_event.FlagEvent(func, *args)` binds a callable to its arguments.

- `run()` calls the callable and returns its result. If no callable is set, it raises `EventNotSetError`.
- `try_run()` returns `True` or `False` and leaves any error message in `last_error`.
- `set_triggered_func(func, *args)` replaces the callable. It also replaces the stored arguments, but only when new ones are given.
- `set_func_arguments(*args)` replaces the stored arguments.

## Generating serialization code

### The tree

The pipeline works on trees of `SASTNode` from `gentools.sast`. Each node records:

- the qualified name of its type;
- its `SerializationPolicy`;
- the requested formats;
- its fields, each a `SASTField` with a `SASTType`;
- its serializable base nodes.

### Describing types

Types are described with `RecordDecl` and `FieldDecl` from `gentools.ast_parser`. The annotation strings on them are the ones that the serialization macros attach.

`gentools.generator_action.macro_annotation(macro, *args)` gives the annotation for a macro. For example:

- `macro_annotation("SERIALIZABLE", "JSON")` gives `"serializable:JSON"`.
- `macro_annotation("SERIALIZE_FIELD")` gives `"serialize"`.
- `GENERATED_SERIALIZATION_BODY` gives `None`.

### Stages

1. **Parse.** `ASTParser` turns record declarations into nodes and fills a `SASTResult`.
   - Nested records are visited after their parent.
   - Under the `all` and `pod` policies, every field is included unless it is excluded.
   - Under the other policies, only fields marked with `serialize` or `serialize:<name>` are included.
   - The list following `serializable:` is split on commas, and the parts become the node's formats.
2. **Validate.** When a file yields serializable types, the parser checks that file on disk with `validate_file`.
   - The file must include `<stem>.generated.h`.
   - The file must contain `GENERATED_SERIALIZATION_BODY()`.
   - A failed check is logged.
   - `validate_source(text, path)` runs the same check on text that you already hold.
3. **Merge.** `SASTGeneratorActionFactory` creates one `SASTGeneratorAction` per file. Its `merge_results` combines everything into:
   - a map from file path to tree;
   - a map from type name to node.
4. **Link.** `SASTLinker` connects object-typed fields that are still unlinked to nodes in the global map, looked up by type name.
5. **Generate.** `CodeGenerator` asks a `FileFormatRegistry` for the `FormatPlugin` of each requested format and concatenates the plugins' output in a `GeneratedCode` value (`code`: format name to text). A format with no plugin is logged as an error and skipped.

### Running the whole pipeline

`gentools.pipeline.run_pipeline(translation_units, registry=None, link_workers=0, gen_workers=0)` runs all of the stages. It returns a dict from file path to `GeneratedCode`.

- `translation_units` is either a mapping from file path to records, or a sequence of `(path, records)` pairs.
- Linking and generation spread the files over threads.
- A worker count of `0` means one worker per processor.

The pieces are also available on their own as `chunked`, `link_all` and `generate_all`.

```python
from gentools.ast_parser import FieldDecl, FieldKind, RecordDecl
from gentools.format_registry import FileFormatRegistry, FormatPlugin
from gentools.pipeline import run_pipeline


class JsonPlugin(FormatPlugin):
    def generate_code(self, node):
        return f"// JSON for {node.name}: {[f.name for f in node.fields]}\n"


registry = FileFormatRegistry()
registry.register_plugin("JSON", JsonPlugin())

point = RecordDecl(
    name="Point",
    annotations=["serializable:JSON"],
    fields=[FieldDecl("x", "int", FieldKind.INTEGER, ["serialize"])],
)
generated = run_pipeline({"Point.h": [point]}, registry)
generated["Point.h"].code["JSON"]   # "// JSON for Point: ['x']\n"
```

When no registry is given, `default_registry()` is used. This process-wide registry starts out empty.

## What the package does not do

- It does not read source code. You must supply the record and field declarations yourself, as `RecordDecl` and `FieldDecl` values. The only file it reads is the one that `validate_file` checks.
- It ships no format plugins. Every output format has to be registered.
- It does not write generated headers to disk. `run_pipeline` returns the code and leaves writing it to you.
- It provides no command and no complete command-line parser, only the flag primitives described above.