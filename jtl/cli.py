from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .engine import JtlEngine, create_engine
from .errors import JtlUserError
from .jsonic import dumps as jdumps
from .schemas import FilterList, structure_report
from .types import Template
from .version import tool_version

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jtl",
        description="JTL template renderer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--root",
        type=Path,
        default=None,
        help="корень проекта с jtl-cfg/ (по умолчанию текущий каталог)",
    )
    p.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    sp_render.add_argument("template", help="путь шаблона относительно templates_dir")
    sp_render.add_argument(
        "--data",
        type=Path,
        metavar="FILE",
        help="YAML или JSON файл с атрибутами",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        dest="assignments",
        metavar="KEY=VALUE",
        help="атрибут в формате 'key=value', ключ может быть точечным (можно указать несколько)",
    )

    sp_structure = sub.add_parser("structure", help="Структура шаблона (JSON)")
    sp_structure.add_argument("template", help="путь шаблона относительно templates_dir")

    sub.add_parser("filters", help="Список зарегистрированных фильтров (JSON)")

    return p


def _load_data(path: Optional[Path]) -> Dict[str, Any]:
    """Читает атрибуты из YAML/JSON файла."""
    if path is None:
        return {}
    if not path.is_file():
        raise ValueError(f"Data file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ValueError(f"Failed to parse data file {path}: {e}")
    if not isinstance(raw, dict):
        raise ValueError(f"Data file must contain a mapping: {path}")
    return raw


def _parse_scalar(text: str) -> Any:
    """Значение из --set: YAML-скаляр (числа, true/false), иначе строка."""
    try:
        value = _yaml.load(text)
    except YAMLError:
        return text
    return text if value is None or isinstance(value, (dict, list)) else value


def _apply_assignments(data: Dict[str, Any], assignments: List[str] | None) -> Dict[str, Any]:
    """
    Применяет --set key=value поверх атрибутов.

    Точечный ключ создает вложенные словари: a.b=1 -> {"a": {"b": 1}}.
    """
    for spec in assignments or []:
        if "=" not in spec:
            raise ValueError(f"Invalid assignment '{spec}'. Expected 'key=value'")
        key, value = spec.split("=", 1)
        parts = [p.strip() for p in key.split(".")]
        if not all(parts):
            raise ValueError(f"Invalid attribute key '{key}'")

        target = data
        for part in parts[:-1]:
            nested = target.get(part)
            if not isinstance(nested, dict):
                nested = {}
                target[part] = nested
            target = nested
        target[parts[-1]] = _parse_scalar(value)
    return data


def _read_raw(engine: JtlEngine, location: str) -> str:
    if engine.asset_builder is None:
        raise ValueError("No asset builder configured")
    return engine.asset_builder.build(location).get_content_as_string()


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    if ns.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")

    root = (ns.root or Path.cwd()).resolve()

    try:
        engine = create_engine(root)

        if ns.cmd == "render":
            data = _apply_assignments(_load_data(ns.data), ns.assignments)
            logger.debug(f"Rendering '{ns.template}' with attributes: {sorted(data)}")
            result = engine.render(Template(ns.template, data))
            sys.stdout.write(result.rendered_content)
            return 0

        if ns.cmd == "structure":
            raw = _read_raw(engine, ns.template)
            structure = engine.renderer.structure_parser.parse(raw)
            report = structure_report(ns.template, structure)
            sys.stdout.write(jdumps(report.model_dump(mode="json")))
            return 0

        if ns.cmd == "filters":
            listing = FilterList(filters=engine.filter_registry.names())
            sys.stdout.write(jdumps(listing.model_dump(mode="json")))
            return 0

    except JtlUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
