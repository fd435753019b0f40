import io

import pytest

from conllx import (
    PartitioningWriter,
    Reader,
    Sentence,
    SentenceWriter,
    TokenBuilder,
    Writer,
    by_key,
    hashed,
    round_robin,
    weighted,
)


def corpus(size):
    return [
        Sentence([TokenBuilder().form(f"w{i}").lemma(f"w{i}").cpos("X").pos("X").head(0).head_rel("ROOT").build()])
        for i in range(size)
    ]


class CollectingWriter(SentenceWriter):
    def __init__(self):
        self.sentences = []
        self.closed = False

    def write_sentence(self, sentence):
        self.sentences.append(sentence)

    def close(self):
        self.closed = True


def split(sentences, n, selector=None):
    writers = [CollectingWriter() for _ in range(n)]
    PartitioningWriter(writers, selector).write_sentences(sentences)
    return [[s[0].form for s in w.sentences] for w in writers]


def test_round_robin_is_default():
    assert split(corpus(5), 2) == [["w0", "w2", "w4"], ["w1", "w3"]]


def test_every_sentence_written_exactly_once():
    parts = split(corpus(50), 3, hashed)

    assert sorted(form for part in parts for form in part) == sorted(f"w{i}" for i in range(50))


@pytest.mark.parametrize("selector", [None, hashed, weighted([3, 1, 1]), by_key(lambda i, s: s[0].form)])
def test_partitioning_is_deterministic(selector):
    assert split(corpus(40), 3, selector) == split(corpus(40), 3, selector)


def test_weighted_split():
    parts = split(corpus(10), 3, weighted([8, 1, 1]))

    assert parts == [[f"w{i}" for i in range(8)], ["w8"], ["w9"]]


def test_hashed_ignores_position():
    sentences = corpus(20)

    forward = {form: i for i, part in enumerate(split(sentences, 4, hashed)) for form in part}
    backward = {form: i for i, part in enumerate(split(sentences[::-1], 4, hashed)) for form in part}
    assert forward == backward


@pytest.mark.parametrize("weights", [[], [1, 0], [2, -1]])
def test_weighted_rejects_bad_weights(weights):
    with pytest.raises(ValueError):
        weighted(weights)


def test_weighted_rejects_partition_count_mismatch():
    with pytest.raises(ValueError):
        split(corpus(1), 2, weighted([1, 1, 1]))


def test_out_of_range_selector_is_rejected():
    writer = PartitioningWriter([CollectingWriter()], lambda i, s, n: n)

    with pytest.raises(ValueError):
        writer.write_sentence(corpus(1)[0])
    assert writer.position == 0


def test_needs_at_least_one_writer():
    with pytest.raises(ValueError):
        PartitioningWriter([])


def test_raw_sinks_are_wrapped():
    sinks = [io.BytesIO(), io.BytesIO()]
    writer = PartitioningWriter(sinks)
    writer.write_sentences(corpus(4))

    assert all(isinstance(w, Writer) for w in writer.writers)
    first = list(Reader(io.BytesIO(sinks[0].getvalue())))
    assert [s[0].form for s in first] == ["w0", "w2"]


def test_io_error_halts_partitioning():
    class Broken(SentenceWriter):
        def write_sentence(self, sentence):
            raise OSError("broken pipe")

    good = CollectingWriter()
    writer = PartitioningWriter([good, Broken()])

    with pytest.raises(OSError):
        writer.write_sentences(corpus(4))
    assert len(good.sentences) == 1
    assert writer.counts == [1, 0]


def test_summary_and_close():
    writers = [CollectingWriter(), CollectingWriter()]
    with PartitioningWriter(writers, weighted([2, 1])) as splitter:
        splitter.write_sentences(corpus(6))
        table = splitter.summary(names=["train", "test"])

    assert splitter.counts == [4, 2]
    assert splitter.token_counts == [4, 2]
    assert all(w.closed for w in writers)
    lines = table.splitlines()
    assert lines[0].split() == ["Partition", "Sentences", "Tokens"]
    assert lines[2].split() == ["train", "4", "4"]
    assert lines[3].split() == ["test", "2", "2"]
    assert lines[4].split() == ["total", "6", "6"]


def test_summary_rejects_wrong_name_count():
    with pytest.raises(ValueError):
        PartitioningWriter([CollectingWriter()]).summary(names=["a", "b"])


def test_close_reaches_every_writer_when_one_fails():
    class FailingClose(CollectingWriter):
        def close(self):
            super().close()
            raise OSError("cannot close")

    failing, healthy = FailingClose(), CollectingWriter()
    writer = PartitioningWriter([failing, healthy])

    with pytest.raises(OSError, match="cannot close"):
        writer.close()
    assert failing.closed
    assert healthy.closed


def test_selectors_take_index_sentence_and_partition_count():
    sentence = corpus(1)[0]

    assert round_robin(7, sentence, 3) == 1
    assert 0 <= hashed(7, sentence, 3) < 3
    assert weighted([1, 2])(2, sentence, 2) == 1
    assert by_key(lambda index, s: "doc-1")(0, sentence, 4) == by_key(lambda index, s: "doc-1")(9, sentence, 4)
