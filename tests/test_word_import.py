from core.word_import import load_word_csv, parse_word_csv, to_documents
from core.word_repo import StaticWordSupply

CSV = """id;english;turkish;level
w1;apple;elma;A2
w2;cat;kedi

w3;dog
w4; ;bos;A1
"""


def test_parse_word_csv_skips_header_and_bad_rows() -> None:
    words = parse_word_csv(CSV)

    assert [w.id for w in words] == ["w1", "w2"]
    assert words[0].source == "apple"
    assert words[0].target == "elma"
    assert words[0].level == "A2"
    assert words[1].level == "A1"
    assert all(w.stars == 0 for w in words)


def test_parse_empty_content() -> None:
    assert parse_word_csv("") == []
    assert parse_word_csv("id;english;turkish;level\n") == []


def test_static_supply_from_csv(tmp_path) -> None:
    path = tmp_path / "words.csv"
    path.write_text(CSV, encoding="utf-8")

    assert [w.id for w in load_word_csv(path)] == ["w1", "w2"]
    assert [w.id for w in StaticWordSupply.from_csv(path).fetch()] == ["w1", "w2"]


def test_to_documents_keeps_file_order() -> None:
    docs = to_documents(parse_word_csv(CSV), learner_id="u1", package_name="Basics")

    assert docs[0]["word_id"] == "w1"
    assert docs[0]["english"] == "apple"
    assert docs[0]["frequency_group"] == "A2"
    assert docs[0]["user_id"] == "u1"
    assert docs[0]["package_name"] == "Basics"
    assert docs[0]["added_at"] < docs[1]["added_at"]


def test_to_documents_without_learner_or_package() -> None:
    docs = to_documents(parse_word_csv(CSV))
    assert "user_id" not in docs[0]
    assert "package_name" not in docs[0]
