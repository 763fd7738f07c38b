import csv

from rasterreclass.adapters.csv_exporter import CSVExporter


def test_csv_with_headers_and_dict_rows(tmp_path):
    out = tmp_path / "rep" / "r.csv"
    CSVExporter().render("reclass_summary", {
        "headers": ["class_value", "cells"],
        "rows": [{"class_value": "1", "cells": 4}, {"class_value": "2"}],
    }, str(out))
    rows = list(csv.reader(out.open(encoding="utf-8")))
    assert rows == [["class_value", "cells"], ["1", "4"], ["2", ""]]


def test_csv_infers_headers_and_handles_empty(tmp_path):
    a = tmp_path / "a.csv"
    CSVExporter().render("x", {"rows": [(1, 2)]}, str(a))
    assert a.read_text(encoding="utf-8").splitlines() == ["col1,col2", "1,2"]
    b = tmp_path / "b.csv"
    CSVExporter().render("x", {"headers": ["h"], "rows": []}, str(b))
    assert b.read_text(encoding="utf-8").splitlines() == ["h"]
