"""Canonical 44-byte RIFF/WAVE header for 16-bit mono PCM."""

import struct

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
CHANNELS = 1

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def wav_header(num_samples: int, sample_rate: int = 16000) -> bytes:
    block_align = CHANNELS * BITS_PER_SAMPLE // 8
    data_size = num_samples * block_align
    return _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,  # fmt chunk length
        1,  # PCM
        CHANNELS,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )


def pcm_to_wav(pcm: bytes, sample_rate: int = 16000) -> bytes:
    return wav_header(len(pcm) // 2, sample_rate) + pcm
