from __future__ import annotations

import argparse

import uvicorn

from hospital.config import HOST, LOG_LEVEL, PORT
from hospital.log_setup import setup_logging
from hospital.seed import seed_base
from hospital.services import (
    chart_summary,
    create_doctor,
    create_patient,
    delete_doctor,
    ensure_schema,
    get_patient,
    list_doctors,
    list_patients,
    update_patient,
)


def cmd_init(args: argparse.Namespace) -> None:
    # ensure_schema already ran in main()
    if not args.schema_ok:
        print("DB initialisation failed, see the log.")
        raise SystemExit(1)
    print("DB initialised.")


def cmd_seed(args: argparse.Namespace) -> None:
    seed_base()
    print("Seed completed.")


def cmd_list(args: argparse.Namespace) -> None:
    if args.entity == "doctors":
        for d in list_doctors():
            print(f"{d['id']} | {d['name']} | {d['specialty'] or '-'}")
    elif args.entity == "patients":
        for p in list_patients():
            print(f"{p['id']} | {p['name']} | {p['ailment'] or '-'} | {p.get('doctor_name', 'Unassigned')}")


def cmd_add_doctor(args: argparse.Namespace) -> None:
    did = create_doctor(args.name, args.specialty)
    print(f"Doctor created: {did}")


def cmd_add_patient(args: argparse.Namespace) -> None:
    pid = create_patient(args.name, args.ailment, args.doctor_id)
    print(f"Patient created: {pid}")


def cmd_assign(args: argparse.Namespace) -> None:
    p = get_patient(args.patient_id)
    if p is None:
        print("Patient not found.")
        return
    update_patient(p["id"], p["name"], p["ailment"], args.doctor_id)
    print(f"Patient {p['id']} assigned to doctor {args.doctor_id or 'none'}.")


def cmd_delete_doctor(args: argparse.Namespace) -> None:
    n = delete_doctor(args.id)
    print(f"Doctor {args.id} deleted, {n} patient(s) unassigned.")


def cmd_chart(args: argparse.Namespace) -> None:
    summary = chart_summary()
    if not summary["labels"]:
        print("No doctors.")
        return
    for label, count in zip(summary["labels"], summary["counts"]):
        print(f"{label}: {count}")


def cmd_serve(args: argparse.Namespace) -> None:
    uvicorn.run("hospital.api_main:app", host=args.host, port=args.port, log_level=LOG_LEVEL.lower())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hospital-cli", description="Hospital CRUD operator commands")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Create the DB tables")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="Load demo doctors and patients")
    p_seed.set_defaults(func=cmd_seed)

    p_list = sub.add_parser("list", help="List entities")
    p_list.add_argument("entity", choices=["doctors", "patients"])
    p_list.set_defaults(func=cmd_list)

    p_addd = sub.add_parser("add-doctor", help="Create doctor")
    p_addd.add_argument("--name", required=True)
    p_addd.add_argument("--specialty", default="")
    p_addd.set_defaults(func=cmd_add_doctor)

    p_addp = sub.add_parser("add-patient", help="Create patient")
    p_addp.add_argument("--name", required=True)
    p_addp.add_argument("--ailment", default="")
    p_addp.add_argument("--doctor-id", type=int, default=0, help="0 = unassigned")
    p_addp.set_defaults(func=cmd_add_patient)

    p_assign = sub.add_parser("assign", help="Assign a patient to a doctor")
    p_assign.add_argument("--patient-id", type=int, required=True)
    p_assign.add_argument("--doctor-id", type=int, required=True, help="0 = unassign")
    p_assign.set_defaults(func=cmd_assign)

    p_deld = sub.add_parser("delete-doctor", help="Delete doctor and unassign its patients")
    p_deld.add_argument("--id", type=int, required=True)
    p_deld.set_defaults(func=cmd_delete_doctor)

    p_chart = sub.add_parser("chart", help="Patients per doctor")
    p_chart.set_defaults(func=cmd_chart)

    p_serve = sub.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default=HOST)
    p_serve.add_argument("--port", type=int, default=PORT)
    p_serve.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(LOG_LEVEL)
    args.schema_ok = ensure_schema()  # guarantees tables
    args.func(args)


if __name__ == "__main__":
    main()
