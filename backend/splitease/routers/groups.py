"""Groups: create with members, list, get, delete."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from splitease.database import get_db
from splitease.models import Group, Member
from splitease.schemas import GroupCreate, GroupResponse, MemberInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])


def _group_response(group: Group) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        name=group.name,
        created_at=group.created_at,
        members=[MemberInfo(id=m.id, name=m.name) for m in group.members],
    )


def get_group_or_404(db: Session, group_id: str) -> Group:
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


@router.get("", response_model=list[GroupResponse])
def list_groups(db: Session = Depends(get_db)):
    groups = db.query(Group).order_by(Group.created_at.desc()).all()
    return [_group_response(g) for g in groups]


@router.post("", response_model=GroupResponse)
def create_group(data: GroupCreate, db: Session = Depends(get_db)):
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Group name is required")
    names = [n.strip() for n in data.member_names if n.strip()]
    if not names:
        raise HTTPException(status_code=400, detail="At least one member required")
    if len(set(names)) != len(names):
        raise HTTPException(status_code=400, detail="Member names must be unique")

    group = Group(name=name)
    group.members = [Member(name=n, position=i) for i, n in enumerate(names)]
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Created group %s with %d members", group.id, len(names))
    return _group_response(group)


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(group_id: str, db: Session = Depends(get_db)):
    return _group_response(get_group_or_404(db, group_id))


@router.delete("/{group_id}", status_code=204)
def delete_group(group_id: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, group_id)
    db.delete(group)
    db.commit()
    logger.info("Deleted group %s", group_id)
