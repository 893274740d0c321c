import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from chocostore.database import get_session
from chocostore.dependencies.admin import require_admin
from chocostore.models.delivery_state import DeliveryState
from chocostore.models.order import Order
from chocostore.schemas.catalog_schemas import StateRead
from chocostore.schemas.state_schemas import StateCreate, StateUpdate
from chocostore.utils.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[StateRead])
def list_states(session: Session = Depends(get_session)):
    return session.exec(select(DeliveryState).order_by(DeliveryState.name)).all()


@router.post("", status_code=201, response_model=StateRead)
def create_state(data: StateCreate, session: Session = Depends(get_session)):
    existing = session.exec(select(DeliveryState).where(DeliveryState.name == data.name)).first()
    if existing:
        raise HTTPException(400, "State already exists")

    state = DeliveryState(name=data.name, delivery_charge=data.delivery_charge)

    session.add(state)
    session.commit()
    session.refresh(state)
    logger.info(f"Created state {state.id} ({state.name}) charge {state.delivery_charge}")

    return state


@router.put("/{state_id}", response_model=StateRead)
def update_state(state_id: int, data: StateUpdate, session: Session = Depends(get_session)):
    state = session.get(DeliveryState, state_id)
    if not state:
        raise HTTPException(404, "State not found")

    if data.name is not None:
        if not data.name.strip():
            raise HTTPException(400, "State name is required")
        state.name = data.name.strip()

    if data.delivery_charge is not None:
        state.delivery_charge = data.delivery_charge

    state.updated_at = utcnow()
    session.add(state)
    session.commit()
    session.refresh(state)

    return state


@router.delete("/{state_id}")
def delete_state(state_id: int, session: Session = Depends(get_session)):
    state = session.get(DeliveryState, state_id)
    if not state:
        raise HTTPException(404, "State not found")

    if session.exec(select(Order).where(Order.state_id == state_id)).first():
        raise HTTPException(400, "State is used by existing orders")

    session.delete(state)
    session.commit()
    logger.info(f"Deleted state {state_id}")

    return {"message": "State deleted"}
