# apicula

A library of building blocks for working with Nintendo DS "Nitro" resources:
models (`.nsbmd`), textures (`.nsbtx`), joint animations (`.nsbca`), pattern
animations (`.nsbtp`) and material animations (`.nsbta`).

Only `numpy` is needed at run time. Tests use `pytest`, available through the
`test` extra.

## Modules

- `apicula.decompress` — `decompress(data, offset=0)` decodes the LZ77
  variants (types `0x10` and `0x11`) used by the DS BIOS. It returns a
  `DecompressResult` with the decoded `data` and the `end` offset just past
  the compressed stream, and raises `DecompressError` otherwise (including
  for declared sizes under 40 bytes or over 4 MiB).
- `apicula.extract` — `find_next_stamp` and `find_next_compression_start_byte`
  search a byte string for Nitro stamps (`BMD0`, `BTX0`, `BCA0`, `BTP0`,
  `BTA0`) and for `0x10`/`0x11` bytes; `file_extension`, `empty_file_name`,
  `report_line` and `FileNameAllocator` name the files found and summarise
  them.
- `apicula.texture_format` — `TextureParams` unpacks the 32-bit texture
  parameter word (offset, repeat/mirror, width, height, format, colour-0
  transparency, texcoord transform mode); `TextureFormat`, `FormatDesc`,
  `AlphaDesc` and `Alpha` describe the eight DS texture formats.
- `apicula.decode_texture` — `decode_texture(params, data1, data2=b"", palette=None)`
  decodes every DS texture format to RGBA8888 bytes, row by row. `palette` is
  the RGB555 little-endian colour data starting at the palette's offset.
  `rgb555a5` converts a single colour.
- `apicula.gpu_cmds` — `parse_gpu_cmds(cmds)` yields `Nop`, `Restore`,
  `Scale`, `Begin`, `End`, `Vertex`, `TexCoord`, `Color` and `Normal`
  commands from a packed GPU command list, raising `GpuCmdError` at the first
  malformed or unsupported command. `num_params` gives an opcode's parameter
  count.
- `apicula.gltf_document` — `GlTF` holds a glTF JSON document and its
  `Buffer`s; it can join the buffers (`update_buffer_views`, `write_buffer`)
  and write a `.glb` (`write_glb`) or a `.gltf` plus `.bin` pair
  (`write_gltf_bin`). `normalized_u8` encodes a value in [0, 1] as a byte.
- `apicula.ngon` — `encode_ngons(indices, index_ranges)` triangulates
  tri/quad index lists so that `FB_ngon_encoding` can rebuild the quads.
- `apicula.object_trs` — `TRS`, `trs_for_object`, `rest_trses`,
  `quaternion_from_matrix` and `adjust_scale_factor` give the rest
  translation/rotation/scale of model objects and turn them into 4x4
  matrices.
- `apicula.collada_xml` — `Xml`, an indenting string builder for XML,
  including row-major output of 4x4 matrices.
- `apicula.make_invertible` — `make_invertible(m)` nudges a singular 4x4
  matrix along its diagonal until it is invertible, falling back to the
  identity.
- `apicula.db` — `Database` collects resources from several parsed
  containers, remembers which file each came from, and indexes textures and
  palettes by name; `expand_directories` replaces directories in a path list
  with their sorted entries (one level deep).
- `apicula.connection` — `build_connection(db, options)` works out which
  texture and palette each material uses (`resolve_material`), and which
  joint, pattern and material animations apply to each model.
  `ConnectionOptions.from_flags` reads the `all-animations` flag.
- `apicula.cli_parse`, `apicula.cli` — `parse_opts` handles `-x`, `--x`,
  `-xfoo`, `-x=foo`, `-x foo`, `--x=foo` and `--x foo`; `parse_cli_args(argv)`
  checks arguments for the `extract`, `view`, `convert` and `info`
  subcommands, printing help, usage or version text and raising
  `SystemExit(0)` when asked for them, and raising `UsageError` on bad usage.
  `usage_text` and `subcommand_help_text` return the help texts.
- `apicula.logger` — `init_logger(verbosity)` installs a stderr handler that
  prints `[LEVEL] message` lines through `BracketFormatter`.
- `apicula.version` — `version_string()` combines the package version with
  the short git revision (asked of `git`, marked `WIP` for a dirty tree) and
  today's UTC date.
- `apicula.errors` — `NitroError`, the base of the package's exceptions.

## Examples

Decompress LZ77 data found at the start of a byte string:

```python
from apicula.decompress import decompress, DecompressError

try:
    result = decompress(blob, 0)
except DecompressError:
    print("not compressed data")
else:
    print(len(result.data), "bytes decompressed, stream ends at", result.end)
```

Inspect a texture parameter word and decode a direct-colour texture:

```python
from apicula.texture_format import TextureParams
from apicula.decode_texture import decode_texture

params = TextureParams(raw_word)
print(params.dim(), params.format().desc().name)
print("needs palette:", params.format().desc().requires_palette)
rgba = decode_texture(params, texel_bytes)
```

Walk a GPU command list:

```python
from apicula.gpu_cmds import parse_gpu_cmds, Vertex

for cmd in parse_gpu_cmds(command_bytes):
    if isinstance(cmd, Vertex):
        print(cmd.position)
```

## What this package does not do

- It does not parse Nitro container files. `Database.add_container` expects
  already-parsed containers: objects with `models`, `textures`, `palettes`,
  `animations`, `patterns` and `mat_anims` lists.
- It has no installed command. `parse_cli_args` checks a command line, but
  nothing here carries out `extract`, `view`, `convert` or `info`.
- It has no model viewer, and no complete model-to-COLLADA or model-to-glTF
  converter; it offers the pieces listed above for building one.
- It does not write PNG images; `decode_texture` returns raw RGBA bytes.