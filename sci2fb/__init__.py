"""Convert Sierra SCI0 FB-01 patch resources into Yamaha FB-01 bank dumps."""

from .bank_info import (  # noqa: F401
    BANK_INFO_REGION_SIZE,
    BANK_INFO_SIZE,
    BankInfo,
    bank_label,
    build_bank_info,
)
from .convert import (  # noqa: F401
    ConversionResult,
    DoubleBank,
    SingleBank,
    convert,
    convert_file,
    convert_patch,
    encode_bank,
)
from .errors import (  # noqa: F401
    ChecksumMismatch,
    ConversionError,
    InternalShapeError,
    InvalidMagic,
    MissingBankSeparator,
    TruncatedInput,
    UnexpectedLength,
)
from .nibble import (  # noqa: F401
    VOICE_PACKET_SIZE,
    VoicePacket,
    checksum,
    denibblize,
    nibblize,
    nibblize_bank,
    nibblize_voice,
)
from .options import ConvertOptions, load_options, parse_options  # noqa: F401
from .output import commit_outputs, write_atomic  # noqa: F401
from .patch import (  # noqa: F401
    BANK_SEPARATOR,
    MAGIC,
    VOICE_SIZE,
    VOICES_PER_BANK,
    PatchHeader,
    PatchResource,
    PatchShape,
    extract_voices,
    identify,
    read_patch,
)
from .sysex import (  # noqa: F401
    BANK_STREAM_SIZE,
    BankStream,
    bank_header,
    build_bank_stream,
    parse_bank_stream,
)
