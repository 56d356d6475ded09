"""Simple string templates for the context-level C# files (Jinja2-free)."""
from typing import List, Optional, Sequence

from repogen.core.config import settings
from repogen.metadata.discovery import is_data_context
from repogen.metadata.naming import render_name
from repogen.metadata.types import TypeDescriptor
from repogen.generators.repository_gen.utils import (
    BASE_REPOSITORY,
    BASE_REPOSITORY_INTERFACE,
    REPOSITORY_HELPER,
    UNIT_OF_WORK,
    UNIT_OF_WORK_INTERFACE,
    entity_name,
    generic_of,
    repository_name,
)


def render_namespace(namespace: str, usings: Sequence[str], body: List[str]) -> str:
    """Wrap body lines in using directives and a namespace block.

    Body lines are written at one indentation level (4 spaces). Types in
    the global namespace are emitted without a namespace block.
    """
    lines = [f"using {using};" for using in usings]
    if lines:
        lines.append("")

    if namespace:
        lines.append(f"namespace {namespace}")
        lines.append("{")
        lines.extend(body)
        lines.append("}")
    else:
        lines.extend(line[4:] if line.startswith("    ") else line for line in body)

    return "\n".join(lines) + "\n"


def render_ef_repository(context: TypeDescriptor) -> str:
    """Generate EFRepository.cs content."""
    base = generic_of(BASE_REPOSITORY, "T")
    base_interface = generic_of(BASE_REPOSITORY_INTERFACE, "T")

    body = [
        f"    public class {base} : {base_interface} where T : class",
        "    {",
        f"        public {UNIT_OF_WORK_INTERFACE} UnitOfWork {{ get; set; }}",
        "",
        "        private IDbSet<T> _objectset;",
        "        private IDbSet<T> ObjectSet",
        "        {",
        "            get",
        "            {",
        "                if (_objectset == null)",
        "                {",
        "                    _objectset = UnitOfWork.Context.Set<T>();",
        "                }",
        "                return _objectset;",
        "            }",
        "        }",
        "",
        "        public virtual IQueryable<T> All()",
        "        {",
        "            return ObjectSet.AsQueryable();",
        "        }",
        "",
        "        public IQueryable<T> Where(Expression<Func<T, bool>> expression)",
        "        {",
        "            return ObjectSet.Where(expression);",
        "        }",
        "",
        "        public virtual void Add(T entity)",
        "        {",
        "            ObjectSet.Add(entity);",
        "        }",
        "",
        "        public virtual void Delete(T entity)",
        "        {",
        "            ObjectSet.Remove(entity);",
        "        }",
        "    }",
    ]
    usings = ["System", "System.Data.Entity", "System.Linq", "System.Linq.Expressions"]
    return render_namespace(context.namespace, usings, body)


def render_iunit_of_work(context: TypeDescriptor) -> str:
    """Generate IUnitOfWork.cs content."""
    body = [
        f"    public interface {UNIT_OF_WORK_INTERFACE}",
        "    {",
        "        DbContext Context { get; set; }",
        "        void Commit();",
        "        bool LazyLoadingEnabled { get; set; }",
        "        bool ProxyCreationEnabled { get; set; }",
        "        string ConnectionString { get; set; }",
        "    }",
    ]
    return render_namespace(context.namespace, ["System.Data.Entity"], body)


def _forwarding_property(type_name: str, name: str, target: str) -> List[str]:
    return [
        f"        public {type_name} {name}",
        "        {",
        f"            get {{ return {target}; }}",
        f"            set {{ {target} = value; }}",
        "        }",
    ]


def render_ef_unit_of_work(context: TypeDescriptor) -> str:
    """Generate EFUnitOfWork.cs content. The unit of work owns one context instance."""
    body = [
        f"    public class {UNIT_OF_WORK} : {UNIT_OF_WORK_INTERFACE}",
        "    {",
        "        public DbContext Context { get; set; }",
        "",
        f"        public {UNIT_OF_WORK}()",
        "        {",
        f"            Context = new {render_name(context)}();",
        "        }",
        "",
        "        public void Commit()",
        "        {",
        "            Context.SaveChanges();",
        "        }",
        "",
    ]
    body += _forwarding_property("bool", "LazyLoadingEnabled", "Context.Configuration.LazyLoadingEnabled")
    body.append("")
    body += _forwarding_property("bool", "ProxyCreationEnabled", "Context.Configuration.ProxyCreationEnabled")
    body.append("")
    body += _forwarding_property("string", "ConnectionString", "Context.Database.Connection.ConnectionString")
    body.append("    }")
    return render_namespace(context.namespace, ["System.Data.Entity"], body)


def render_irepository(context: TypeDescriptor) -> str:
    """Generate IRepository.cs content."""
    body = [
        f"    public interface {generic_of(BASE_REPOSITORY_INTERFACE, 'T')}",
        "    {",
        f"        {UNIT_OF_WORK_INTERFACE} UnitOfWork {{ get; set; }}",
        "        IQueryable<T> All();",
        "        IQueryable<T> Where(Expression<Func<T, bool>> expression);",
        "        void Add(T entity);",
        "        void Delete(T entity);",
        "    }",
    ]
    usings = ["System", "System.Collections.Generic", "System.Linq", "System.Linq.Expressions", "System.Text"]
    return render_namespace(context.namespace, usings, body)


def render_repository_helper(
    context: TypeDescriptor,
    entities: Sequence[TypeDescriptor],
    base_types: Optional[Sequence[str]] = None,
) -> str:
    """Generate RepositoryHelper.cs content.

    Returns an empty string when ``context`` is not a data context.
    """
    if base_types is None:
        base_types = settings.context_base_types
    if not is_data_context(context, base_types):
        return ""

    body = [
        f"    public static class {REPOSITORY_HELPER}",
        "    {",
        f"        public static {UNIT_OF_WORK_INTERFACE} GetUnitOfWork()",
        "        {",
        f"            return new {UNIT_OF_WORK}();",
        "        }",
    ]

    for entity in entities:
        repository = repository_name(entity)
        getter = f"Get{entity_name(entity)}Repository"
        body += [
            "",
            f"        public static {repository} {getter}()",
            "        {",
            f"            var repository = new {repository}();",
            "            repository.UnitOfWork = GetUnitOfWork();",
            "            return repository;",
            "        }",
            "",
            f"        public static {repository} {getter}({UNIT_OF_WORK_INTERFACE} unitOfWork)",
            "        {",
            f"            var repository = new {repository}();",
            "            repository.UnitOfWork = unitOfWork;",
            "            return repository;",
            "        }",
        ]

    body.append("    }")
    return render_namespace(context.namespace, [], body)
