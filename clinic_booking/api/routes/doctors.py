from typing import List
from fastapi import APIRouter, Depends

from clinic_booking.api.deps import get_store, verify_admin
from clinic_booking.api.schemas import DeleteAck, DoctorCreate, DoctorResponse, InsertAck
from clinic_booking.database import ClinicStore, Doctor

router = APIRouter(dependencies=[Depends(verify_admin)])


@router.get("", response_model=List[DoctorResponse])
async def list_doctors(store: ClinicStore = Depends(get_store)):
    return await store.list_doctors()


@router.post("", response_model=InsertAck, response_model_exclude_none=True)
async def add_doctor(doctor_data: DoctorCreate, store: ClinicStore = Depends(get_store)):
    doctor = await store.add_doctor(Doctor(**doctor_data.model_dump()))
    await store.commit()
    return InsertAck(acknowledged=True, inserted_id=doctor.id)


@router.delete("/{doctor_id}", response_model=DeleteAck)
async def delete_doctor(doctor_id: str, store: ClinicStore = Depends(get_store)):
    deleted = await store.delete_doctor(doctor_id)
    await store.commit()
    return DeleteAck(acknowledged=True, deleted_count=deleted)
